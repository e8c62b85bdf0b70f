"""
Read-only catalog API.

Serves per-category product records from the JSON catalog store, the resolved
display state for a product/variant selection, and the admin name check.
"""

from fastapi import Depends, FastAPI, HTTPException, Query

from backend.catalog import CATEGORY_KEYS, CatalogStore
from backend.pricing import resolve_display_state
from backend.pricing.listing import discounted_products
from backend.uniqueness import FileCatalogSource, NameUniquenessChecker
from models import Product, ResolvedDisplayState, VariantSelection

app = FastAPI(title="Catalog Pricing API")


def get_store() -> CatalogStore:
    return CatalogStore()


def _require_category(category: str) -> str:
    if category not in CATEGORY_KEYS:
        raise HTTPException(status_code=404, detail=f"Category '{category}' not found")
    return category


@app.get("/catalog/discounted", response_model=list[Product])
def list_discounted(store: CatalogStore = Depends(get_store)) -> list[Product]:
    products: list[Product] = []
    for category in CATEGORY_KEYS:
        products.extend(store.load_products(category))
    return discounted_products(products)


@app.get("/catalog/{category}", response_model=list[Product])
def list_category(category: str, store: CatalogStore = Depends(get_store)) -> list[Product]:
    return store.load_products(_require_category(category))


@app.get("/catalog/{category}/{slug}", response_model=Product)
def get_product(category: str, slug: str, store: CatalogStore = Depends(get_store)) -> Product:
    product = store.find_product(_require_category(category), slug)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{slug}' not found")
    return product


@app.get("/catalog/{category}/{slug}/display", response_model=ResolvedDisplayState)
def get_display_state(
    category: str,
    slug: str,
    variant: int = Query(0, description="Selected variant index"),
    hovered: int | None = Query(None, description="Hovered variant index (pointer devices)"),
    touch: bool = Query(False, description="Selection comes from a touch device"),
    store: CatalogStore = Depends(get_store),
) -> ResolvedDisplayState:
    product = get_product(category, slug, store)
    selection = VariantSelection(selected_index=variant, hovered_index=hovered, touch_input=touch)
    return resolve_display_state(product, selection)


@app.get("/admin/names/check")
async def check_name(
    name: str,
    exclude_id: int | None = None,
    store: CatalogStore = Depends(get_store),
) -> dict[str, bool]:
    checker = NameUniquenessChecker(FileCatalogSource(store))
    return {"unique": await checker.check(name, exclude_id)}
