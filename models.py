import logging
import math
import re
from enum import Enum
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)

from backend.decode import decode_options, decode_variants

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"[+-]?\d+(?:[.,]\d+)?")


class CatalogCategory(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    CHEAP = "cheap"
    CROSS = "cross"
    HEART = "heart"
    COMPOSITE = "composite"
    EUROPE = "europe"
    ARTISTIC = "artistic"
    TREE = "tree"
    COMPLEX = "complex"
    EXCLUSIVE = "exclusive"


# Storefront display labels (short and admin forms) -> category key
CATEGORY_LABELS: dict[str, CatalogCategory] = {
    "Одиночные": CatalogCategory.SINGLE,
    "Двойные": CatalogCategory.DOUBLE,
    "Эксклюзивные": CatalogCategory.EXCLUSIVE,
    "Недорогие": CatalogCategory.CHEAP,
    "Бюджетные": CatalogCategory.CHEAP,
    "В виде креста": CatalogCategory.CROSS,
    "В виде сердца": CatalogCategory.HEART,
    "Составные": CatalogCategory.COMPOSITE,
    "Европейские": CatalogCategory.EUROPE,
    "Художественная резка": CatalogCategory.ARTISTIC,
    "В виде деревьев": CatalogCategory.TREE,
    "Мемориальные комплексы": CatalogCategory.COMPLEX,
    "Одиночные памятники": CatalogCategory.SINGLE,
    "Двойные памятники": CatalogCategory.DOUBLE,
    "Недорогие памятники": CatalogCategory.CHEAP,
    "Памятники в виде креста": CatalogCategory.CROSS,
    "Памятники в виде сердца": CatalogCategory.HEART,
    "Составные памятники": CatalogCategory.COMPOSITE,
    "Европейские памятники": CatalogCategory.EUROPE,
    "Памятники в виде деревьев": CatalogCategory.TREE,
    "Эксклюзивные памятники": CatalogCategory.EXCLUSIVE,
}


class CategoryPolicy(str, Enum):
    """
    How variants of a category relate to the base product.

    INDEPENDENT_VARIANTS: each variant is priced and promoted on its own; base
    discounts and the base "hit" flag never leak onto variants.
    INHERITED: variants defer to the base product for anything they omit.
    """

    INDEPENDENT_VARIANTS = "independent_variants"
    INHERITED = "inherited"

    @classmethod
    def for_category(cls, category: CatalogCategory) -> "CategoryPolicy":
        if category is CatalogCategory.EXCLUSIVE:
            return cls.INDEPENDENT_VARIANTS
        return cls.INHERITED


def parse_category(value: object) -> object:
    """Map a display label or key to a CatalogCategory; unknown values pass through to validation."""
    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned in CATEGORY_LABELS:
            return CATEGORY_LABELS[cleaned]
        return cleaned.lower()
    return value


def coerce_amount(v: object) -> float | None:
    """
    Lenient numeric coercion for catalog amounts.

    Accepts numbers and numeric strings ("12500", "12 500", "99,5"). Blank and
    non-numeric strings become None instead of failing validation, and so do
    NaN and infinities.
    """
    if v is None or isinstance(v, bool):
        return None
    amount = None
    if isinstance(v, (int, float)):
        amount = float(v)
    elif isinstance(v, str):
        match = _NUMBER_PATTERN.search(v.replace("\xa0", "").replace(" ", ""))
        if match:
            amount = float(match.group().replace(",", "."))
    if amount is None or not math.isfinite(amount):
        return None
    return amount


def coerce_flag(v: object) -> bool:
    """Stored flags arrive as booleans, 0/1 or "true"/"false" strings."""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v == 1
    if isinstance(v, str):
        return v.strip().lower() in ("true", "1")
    return False


class _CatalogRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price: float | None = None
    old_price: float | None = Field(
        default=None,
        validation_alias=AliasChoices("old_price", "oldPrice"),
        serialization_alias="oldPrice",
    )
    discount_percent: float | None = Field(
        default=None,
        validation_alias=AliasChoices("discount_percent", "discountPercent", "discount"),
        serialization_alias="discountPercent",
    )
    hit: bool = False

    @field_validator("price", "old_price", "discount_percent", mode="before")
    @classmethod
    def _coerce_amount(cls, v: object) -> float | None:
        return coerce_amount(v)

    @field_validator("hit", mode="before")
    @classmethod
    def _coerce_flag(cls, v: object) -> bool:
        return coerce_flag(v)


class Variant(_CatalogRecord):
    """A colour/material option of a product with optional price overrides."""

    name: str = ""
    swatch: str = Field(
        default="",
        validation_alias=AliasChoices("swatch", "color"),
    )
    image: str = ""

    @field_validator("name", "swatch", "image", mode="before")
    @classmethod
    def _null_to_blank(cls, v: object) -> object:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Product(_CatalogRecord):
    id: int
    slug: str = ""
    name: str
    description: str | None = None
    category: CatalogCategory
    image: str = ""
    popular: bool = False
    price_on_request: bool = Field(
        default=False,
        validation_alias=AliasChoices("price_on_request", "priceOnRequest"),
        serialization_alias="priceOnRequest",
    )
    variants: list[Variant] = Field(
        default_factory=list,
        validation_alias=AliasChoices("variants", "colors"),
    )
    options: dict[str, str] = Field(default_factory=dict)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v: object) -> object:
        return parse_category(v)

    @field_validator("variants", mode="before")
    @classmethod
    def _decode_variants(cls, v: object) -> list[Variant]:
        # A malformed entry is dropped on its own; it never fails the product.
        variants: list[Variant] = []
        for index, item in enumerate(decode_variants(v)):
            try:
                variants.append(Variant.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid variant #%d: %s", index, exc.errors(include_url=False)
                )
        return variants

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, v: object) -> dict[str, str]:
        return decode_options(v)

    @field_validator("popular", "price_on_request", mode="before")
    @classmethod
    def _coerce_bool(cls, v: object) -> bool:
        return coerce_flag(v)

    @property
    def policy(self) -> CategoryPolicy:
        return CategoryPolicy.for_category(self.category)


class VariantSelection(BaseModel):
    """
    UI selection state for a product card or detail page.

    Touch devices act on the tapped variant; pointer devices show the hovered
    variant and fall back to the selected one when nothing is hovered.
    """

    selected_index: int = 0
    hovered_index: int | None = None
    touch_input: bool = False

    @property
    def active_index(self) -> int:
        if self.touch_input or self.hovered_index is None:
            return self.selected_index
        return self.hovered_index


class ResolvedPrices(BaseModel):
    price: float | None = None
    old_price: float | None = None
    discount_percent: float | None = None


class ResolvedDisplayState(BaseModel):
    effective_price: float | None = None
    effective_old_price: float | None = None
    effective_discount_percent: int | None = None
    show_discount_badge: bool = False
    show_hit_badge: bool = False
    is_price_on_request: bool = False


PriceField = Literal["price", "old_price", "discount_percent"]


class FormPriceState(BaseModel):
    """Raw admin form values. Strings mirror what the operator typed."""

    model_config = ConfigDict(populate_by_name=True)

    price: str = ""
    old_price: str = Field(
        default="", validation_alias=AliasChoices("old_price", "oldPrice")
    )
    discount_percent: str = Field(
        default="",
        validation_alias=AliasChoices("discount_percent", "discountPercent", "discount"),
    )
    price_on_request: bool = Field(
        default=False,
        validation_alias=AliasChoices("price_on_request", "priceOnRequest"),
    )


class PersistedPrice(BaseModel):
    """The projection of FormPriceState accepted by the admin write endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    price: float
    old_price: float | None = Field(default=None, serialization_alias="oldPrice")
    discount_percent: int | None = Field(
        default=None, serialization_alias="discountPercent"
    )

    @computed_field(alias="priceOnRequest")
    @property
    def price_on_request(self) -> bool:
        return self.price <= 0


class NameCheckResult(BaseModel):
    generation: int
    name: str
    exclude_id: int | None = None
    unique: bool
