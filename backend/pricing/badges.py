"""Discount and "hit" badge resolution, and assembly of the full display state."""
from __future__ import annotations

from models import (
    CategoryPolicy,
    Product,
    ResolvedDisplayState,
    ResolvedPrices,
    Variant,
    VariantSelection,
)

from .form import discount_from_prices, round_half_up
from .resolver import VariantPriceResolver, is_price_on_request, select_variant


def _has_markdown(price: float | None, old_price: float | None) -> bool:
    return bool(price and price > 0 and old_price and old_price > price)


class DiscountBadgeResolver:
    def should_show_discount(self, resolved: ResolvedPrices) -> bool:
        """An explicit positive discount, or an old price above a positive price."""
        if resolved.discount_percent is not None and resolved.discount_percent > 0:
            return True
        return _has_markdown(resolved.price, resolved.old_price)

    def badge_percent(self, resolved: ResolvedPrices) -> int:
        """The explicit discount when positive, otherwise derived from the two prices (0 if neither)."""
        if resolved.discount_percent is not None and resolved.discount_percent > 0:
            return round_half_up(resolved.discount_percent)
        if _has_markdown(resolved.price, resolved.old_price):
            return discount_from_prices(resolved.price, resolved.old_price)
        return 0

    def should_show_hit(
        self,
        product: Product,
        selected_variant: Variant | None,
        policy: CategoryPolicy | None = None,
    ) -> bool:
        """
        Whether the "hit" badge is shown for the active selection.

        Under INDEPENDENT_VARIANTS only the selected variant's own flag counts;
        the base flag never applies to a variant, and no selection means no
        badge. An exclusive product with no variants at all has nothing to
        select, so it shows the product flag, as the storefront product card does.
        """
        policy = policy or product.policy
        if policy is CategoryPolicy.INDEPENDENT_VARIANTS and product.variants:
            return selected_variant is not None and selected_variant.hit
        return product.hit


def resolve_display_state(
    product: Product,
    selection: VariantSelection | int | None = None,
    *,
    price_resolver: VariantPriceResolver | None = None,
    badge_resolver: DiscountBadgeResolver | None = None,
) -> ResolvedDisplayState:
    """
    Compute what a product card or detail page shows for the current selection.

    Computed fresh on every call. When the price is on request the numeric
    fields are blank and no discount badge is shown.
    """
    price_resolver = price_resolver or VariantPriceResolver()
    badge_resolver = badge_resolver or DiscountBadgeResolver()
    if selection is None:
        selection = VariantSelection()

    policy = product.policy
    variant = select_variant(product, selection)
    resolved = price_resolver.resolve(product, variant, policy)
    show_hit = badge_resolver.should_show_hit(product, variant, policy)

    if is_price_on_request(product, resolved.price):
        return ResolvedDisplayState(show_hit_badge=show_hit, is_price_on_request=True)

    show_discount = badge_resolver.should_show_discount(resolved)
    return ResolvedDisplayState(
        effective_price=resolved.price,
        effective_old_price=resolved.old_price,
        effective_discount_percent=badge_resolver.badge_percent(resolved) if show_discount else None,
        show_discount_badge=show_discount,
        show_hit_badge=show_hit,
        is_price_on_request=False,
    )
