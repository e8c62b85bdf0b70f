"""Unit tests for variant price resolution and the price-on-request rule."""

import unittest

from backend.pricing.resolver import (
    VariantPriceResolver,
    find_legacy_price_on_request,
    is_price_on_request,
    select_variant,
)
from models import CategoryPolicy, CatalogCategory, Product, VariantSelection


def _make_product(category: str = "single", variants: list[dict] | None = None, **overrides) -> Product:
    payload = {
        "id": 1,
        "slug": "o-1",
        "name": "Одиночный О-1",
        "category": category,
        "price": 500,
        "oldPrice": 600,
        "discount": 17,
        "variants": variants or [],
    }
    payload.update(overrides)
    return Product.model_validate(payload)


class TestVariantPriceResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = VariantPriceResolver()

    def test_no_variants_uses_base_fields(self) -> None:
        product = _make_product()
        resolved = self.resolver.resolve(product, None)
        self.assertEqual((resolved.price, resolved.old_price, resolved.discount_percent), (500, 600, 17))

    def test_non_exclusive_variant_without_old_price_falls_back(self) -> None:
        product = _make_product("single", [{"name": "Green", "price": 450}])
        resolved = self.resolver.resolve(product, product.variants[0])
        self.assertEqual((resolved.price, resolved.old_price, resolved.discount_percent), (450, 600, 17))

    def test_exclusive_variant_without_old_price_suppresses_discount(self) -> None:
        product = _make_product("exclusive", [{"name": "Green", "price": 450}])
        resolved = self.resolver.resolve(product, product.variants[0])
        self.assertEqual(resolved.price, 450)
        self.assertIsNone(resolved.old_price)
        self.assertIsNone(resolved.discount_percent)

    def test_variant_old_price_is_authoritative(self) -> None:
        variants = [{"name": "Red", "price": 2700, "oldPrice": 3100}]
        for category in ("single", "exclusive"):
            product = _make_product(category, variants)
            resolved = self.resolver.resolve(product, product.variants[0])
            self.assertEqual(resolved.price, 2700)
            self.assertEqual(resolved.old_price, 3100)
            # the variant's own (empty) discount wins; no fallback to the base 17
            self.assertIsNone(resolved.discount_percent)

    def test_variant_without_price_uses_base_price(self) -> None:
        product = _make_product("single", [{"name": "Black"}])
        resolved = self.resolver.resolve(product, product.variants[0])
        self.assertEqual(resolved.price, 500)

    def test_explicit_policy_overrides_category(self) -> None:
        product = _make_product("single", [{"name": "Green", "price": 450}])
        resolved = self.resolver.resolve(
            product, product.variants[0], CategoryPolicy.INDEPENDENT_VARIANTS
        )
        self.assertIsNone(resolved.old_price)

    def test_zero_variant_price_is_an_override(self) -> None:
        product = _make_product("single", [{"name": "Bronze", "price": 0}])
        resolved = self.resolver.resolve(product, product.variants[0])
        self.assertEqual(resolved.price, 0)


class TestCategoryPolicy(unittest.TestCase):
    def test_only_exclusive_has_independent_variants(self) -> None:
        for category in CatalogCategory:
            expected = (
                CategoryPolicy.INDEPENDENT_VARIANTS
                if category is CatalogCategory.EXCLUSIVE
                else CategoryPolicy.INHERITED
            )
            self.assertIs(CategoryPolicy.for_category(category), expected)

    def test_display_labels_normalize_to_keys(self) -> None:
        self.assertIs(_make_product("Эксклюзивные").category, CatalogCategory.EXCLUSIVE)
        self.assertIs(_make_product("Эксклюзивные памятники").policy, CategoryPolicy.INDEPENDENT_VARIANTS)
        self.assertIs(_make_product("Одиночные памятники").category, CatalogCategory.SINGLE)
        self.assertIs(_make_product("SINGLE").category, CatalogCategory.SINGLE)


class TestSelectVariant(unittest.TestCase):
    def setUp(self) -> None:
        self.product = _make_product("single", [{"name": "A"}, {"name": "B"}])

    def test_index_and_selection(self) -> None:
        self.assertEqual(select_variant(self.product, 1).name, "B")
        self.assertEqual(select_variant(self.product, VariantSelection(selected_index=0)).name, "A")

    def test_hover_wins_on_pointer_devices_only(self) -> None:
        hovered = VariantSelection(selected_index=0, hovered_index=1)
        self.assertEqual(select_variant(self.product, hovered).name, "B")
        touched = VariantSelection(selected_index=0, hovered_index=1, touch_input=True)
        self.assertEqual(select_variant(self.product, touched).name, "A")

    def test_out_of_range_selects_nothing(self) -> None:
        self.assertIsNone(select_variant(self.product, 2))
        self.assertIsNone(select_variant(self.product, -1))
        self.assertIsNone(select_variant(_make_product(), 0))


class TestPriceOnRequest(unittest.TestCase):
    def test_missing_or_zero_price(self) -> None:
        product = _make_product()
        self.assertTrue(is_price_on_request(product, None))
        self.assertTrue(is_price_on_request(product, 0))
        self.assertFalse(is_price_on_request(product, 500))

    def test_description_phrases(self) -> None:
        for description in ("Цена по запросу", "Изготовление под заказ"):
            product = _make_product(description=description)
            self.assertTrue(is_price_on_request(product, 500), description)

    def test_explicit_flag(self) -> None:
        product = _make_product(priceOnRequest=True)
        self.assertTrue(is_price_on_request(product, 500))

    def test_legacy_records_are_reported_for_migration(self) -> None:
        legacy = _make_product(id=2, description="цена по запросу")
        flagged = _make_product(id=3, description="цена по запросу", priceOnRequest=True)
        plain = _make_product(id=4)
        self.assertEqual([p.id for p in find_legacy_price_on_request([legacy, flagged, plain])], [2])


if __name__ == "__main__":
    unittest.main()
