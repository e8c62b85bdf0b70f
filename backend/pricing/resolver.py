"""
Variant price resolution.

A product may expose colour/material variants, each optionally overriding the
base price, old price and discount. The effective triple for the active
variant is resolved by a fixed cascade (first matching rule wins):

  1. price: the variant's own price, else the base price.
  2. No variants at all: base old price and discount.
  3. The variant declares an old price: the variant's old price and discount,
     taken as-is even when its discount is empty.
  4. INDEPENDENT_VARIANTS policy: no old price, no discount. A base-level
     sale must not leak onto independently priced variants.
  5. INHERITED policy: base old price and discount.
"""
from __future__ import annotations

from models import CategoryPolicy, Product, ResolvedPrices, Variant, VariantSelection

PRICE_ON_REQUEST_PHRASES: tuple[str, ...] = ("цена по запросу", "под заказ")


def select_variant(
    product: Product, selection: VariantSelection | int | None
) -> Variant | None:
    """Return the active variant, or None when the product has none or the index is out of range."""
    if selection is None or not product.variants:
        return None
    index = selection.active_index if isinstance(selection, VariantSelection) else selection
    if 0 <= index < len(product.variants):
        return product.variants[index]
    return None


class VariantPriceResolver:
    """Resolves the price triple to display for a product and its active variant."""

    def resolve(
        self,
        product: Product,
        selected_variant: Variant | None,
        policy: CategoryPolicy | None = None,
    ) -> ResolvedPrices:
        policy = policy or product.policy

        price = product.price
        if selected_variant is not None and selected_variant.price is not None:
            price = selected_variant.price

        if not product.variants:
            return ResolvedPrices(
                price=price,
                old_price=product.old_price,
                discount_percent=product.discount_percent,
            )

        if selected_variant is not None and selected_variant.old_price is not None:
            return ResolvedPrices(
                price=price,
                old_price=selected_variant.old_price,
                discount_percent=selected_variant.discount_percent,
            )

        if policy is CategoryPolicy.INDEPENDENT_VARIANTS:
            return ResolvedPrices(price=price, old_price=None, discount_percent=None)

        return ResolvedPrices(
            price=price,
            old_price=product.old_price,
            discount_percent=product.discount_percent,
        )


def description_requests_price(description: str | None) -> bool:
    if not description:
        return False
    lowered = description.lower()
    return any(phrase in lowered for phrase in PRICE_ON_REQUEST_PHRASES)


def is_price_on_request(product: Product, resolved_price: float | None) -> bool:
    """
    True when no numeric price should be shown.

    Triggered by the explicit flag, a missing/zero price, or one of the legacy
    description phrases.
    """
    if product.price_on_request:
        return True
    if resolved_price is None or resolved_price <= 0:
        return True
    return description_requests_price(product.description)


def find_legacy_price_on_request(products: list[Product]) -> list[Product]:
    """
    Products whose "price on request" state is encoded only in the description.

    These are candidates for migrating to the explicit `price_on_request` flag.
    """
    return [
        product
        for product in products
        if not product.price_on_request
        and product.price is not None
        and product.price > 0
        and description_requests_price(product.description)
    ]
