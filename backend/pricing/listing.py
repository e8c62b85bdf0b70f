"""Catalog listing helpers: sale filtering and "from N" category price tiles."""
from __future__ import annotations

from collections.abc import Iterable

from models import Product

from .form import round_half_up


def has_discount(product: Product) -> bool:
    """Base-level sale check used for the "on sale" carousel."""
    if product.discount_percent is not None and product.discount_percent > 0:
        return True
    return bool(product.old_price and product.old_price > (product.price or 0))


def discounted_products(products: Iterable[Product]) -> list[Product]:
    return [product for product in products if has_discount(product)]


def min_positive_price(products: Iterable[Product]) -> float:
    """Lowest positive base price, or 0 when every product is priced on request."""
    prices = [p.price for p in products if p.price is not None and p.price > 0]
    return min(prices) if prices else 0


def format_from_price(price: float | None) -> str | None:
    if not price or price <= 0:
        return None
    return f"от {round_half_up(price)} руб."
