from .badges import DiscountBadgeResolver, resolve_display_state
from .form import apply_edit, set_price_on_request, to_persisted
from .resolver import VariantPriceResolver, is_price_on_request, select_variant

__all__ = [
    "DiscountBadgeResolver",
    "VariantPriceResolver",
    "apply_edit",
    "is_price_on_request",
    "resolve_display_state",
    "select_variant",
    "set_price_on_request",
    "to_persisted",
]
