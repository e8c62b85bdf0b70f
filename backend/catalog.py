"""
Paths and category registry for the JSON catalog store.

Single source of truth for:
- DATA_DIR:      repository data directory
- CATALOG_DIR:   directory holding one {category}.json array per category
                 (overridable via CATALOG_DATA_DIR)
- CATEGORY_KEYS: every catalog category, in storefront order
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from models import CatalogCategory, Product

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
CATALOG_DIR: Path = DATA_DIR / "catalog"

CATEGORY_KEYS: tuple[str, ...] = tuple(category.value for category in CatalogCategory)


def catalog_dir_from_env() -> Path:
    raw = os.getenv("CATALOG_DATA_DIR")
    return Path(raw) if raw else CATALOG_DIR


class CatalogStore:
    """Read-only access to the per-category JSON files."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or catalog_dir_from_env()

    def path_for(self, category: str) -> Path:
        return self.root / f"{category}.json"

    def load_records(self, category: str) -> list[dict[str, Any]]:
        """Raw records for a category. A missing or corrupt file reads as empty."""
        path = self.path_for(category)
        if not path.exists():
            return []
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable catalog file %s: %s", path.name, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Catalog file %s does not hold a list", path.name)
            return []
        return [record for record in payload if isinstance(record, dict)]

    def load_products(self, category: str) -> list[Product]:
        return [Product.model_validate(record) for record in self.load_records(category)]

    def find_product(self, category: str, slug: str) -> Product | None:
        for product in self.load_products(category):
            if product.slug == slug or str(product.id) == slug:
                return product
        return None

    def write_records(self, category: str, records: list[dict[str, Any]]) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(category)
        path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        return path
