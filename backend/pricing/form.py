"""
Admin price form: keeps price, old price and discount percent consistent.

The operator edits one of the three fields; the other two are recomputed so
that `discount = round((old - price) / old * 100)` holds. Values stay strings
in FormPriceState so a half-typed input such as "12." is never rewritten.
Derived values are rounded to whole numbers (half up), so re-deriving one
field from another is not guaranteed to reproduce an earlier intermediate.
"""
from __future__ import annotations

import math
import re

from models import FormPriceState, PersistedPrice, PriceField

MIN_DISCOUNT_PERCENT = 0
MAX_DISCOUNT_PERCENT = 99

# Leading numeric prefix, the same subset of input a browser's parseFloat accepts.
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: str | None) -> float:
    """Parse form input to a number; anything non-numeric or non-finite counts as 0."""
    if not raw:
        return 0.0
    match = _LEADING_NUMBER.match(raw.replace(",", "."))
    if not match:
        return 0.0
    value = float(match.group())
    return value if math.isfinite(value) else 0.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def discount_from_prices(price: float, old_price: float) -> int:
    return round_half_up((old_price - price) / old_price * 100)


def old_price_from_discount(price: float, discount: float) -> int:
    return round_half_up(price * 100 / (100 - discount))


def apply_edit(state: FormPriceState, field: PriceField, raw_value: str) -> FormPriceState:
    """
    Apply an operator edit to one price field and recompute the dependent one.

    Any numeric edit clears `price_on_request`.
    """
    if field == "price":
        updates = _edit_price(state, raw_value)
    elif field == "old_price":
        updates = _edit_old_price(state, raw_value)
    elif field == "discount_percent":
        updates = _edit_discount(state, raw_value)
    else:
        raise ValueError(f"Unknown price field: {field}")

    updates["price_on_request"] = False
    return state.model_copy(update=updates)


def _edit_price(state: FormPriceState, raw_value: str) -> dict:
    price = parse_amount(raw_value)
    old_price = parse_amount(state.old_price)
    updates: dict = {"price": raw_value}

    if old_price > 0 and price > 0 and old_price > price:
        updates["discount_percent"] = str(discount_from_prices(price, old_price))
    elif old_price > 0 and price >= old_price:
        updates["discount_percent"] = "0"
    return updates


def _edit_old_price(state: FormPriceState, raw_value: str) -> dict:
    old_price = parse_amount(raw_value)
    price = parse_amount(state.price)
    updates: dict = {"old_price": raw_value}

    if price > 0 and old_price > 0 and old_price > price:
        updates["discount_percent"] = str(discount_from_prices(price, old_price))
    elif price > 0 and old_price <= price:
        updates["discount_percent"] = "0"
    return updates


def _edit_discount(state: FormPriceState, raw_value: str) -> dict:
    discount = parse_amount(raw_value)
    price = parse_amount(state.price)
    updates: dict = {"discount_percent": raw_value}

    if price > 0 and 0 < discount < 100:
        updates["old_price"] = str(old_price_from_discount(price, discount))
    elif discount <= 0:
        updates["old_price"] = ""
    # discount >= 100 is kept as typed; to_persisted() caps it
    return updates


def set_price_on_request(state: FormPriceState, enabled: bool) -> FormPriceState:
    """Explicit "price on request" toggle. Turning it on blanks all three numeric fields."""
    if not enabled:
        return state.model_copy(update={"price_on_request": False})
    return state.model_copy(
        update={
            "price": "",
            "old_price": "",
            "discount_percent": "",
            "price_on_request": True,
        }
    )


def clamp_discount(value: float) -> int:
    return max(MIN_DISCOUNT_PERCENT, min(MAX_DISCOUNT_PERCENT, round_half_up(value)))


def to_persisted(state: FormPriceState) -> PersistedPrice:
    """
    Project form state onto the stored representation.

    price 0 is the stored "price on request" sentinel. A discount is only kept
    when it describes a real markdown (old price above a positive price).
    """
    if state.price_on_request:
        return PersistedPrice(price=0, old_price=None, discount_percent=None)

    price = max(parse_amount(state.price), 0.0)
    old_price = parse_amount(state.old_price)
    stored_old_price = old_price if old_price > 0 else None

    discount: int | None = None
    if state.discount_percent.strip() and stored_old_price is not None:
        if price > 0 and stored_old_price > price:
            discount = clamp_discount(parse_amount(state.discount_percent))

    return PersistedPrice(price=price, old_price=stored_old_price, discount_percent=discount)
