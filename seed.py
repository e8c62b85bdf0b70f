"""
Seed script: writes a small demo catalog to data/catalog/{category}.json.

Records are written in the storefront's stored shape (camelCase fields,
`variants` as a JSON-encoded string) so the API and the name check exercise
the same decoding path as real data.

Usage:
    uv run python seed.py
"""

import json
import logging

from backend.catalog import CatalogStore
from models import Product

logger = logging.getLogger(__name__)

DEMO_CATALOG: dict[str, list[dict]] = {
    "single": [
        {
            "id": 5,
            "slug": "odinochnyy-o-1",
            "name": "Одиночный О-1",
            "category": "single",
            "price": 500,
            "oldPrice": 600,
            "discount": 17,
            "hit": True,
            "variants": json.dumps(
                [
                    {"name": "Габбро-диабаз", "color": "#1b1b1b", "image": "/monuments/o-1.webp"},
                    {"name": "Амфиболит", "color": "#3a4a3f", "image": "/monuments/o-1-green.webp", "price": 450},
                ],
                ensure_ascii=False,
            ),
        },
        {
            "id": 6,
            "slug": "odinochnyy-o-2",
            "name": "Одиночный О-2",
            "category": "Одиночные памятники",
            "price": 0,
            "description": "Изготовление под заказ",
        },
    ],
    "exclusive": [
        {
            "id": 40,
            "slug": "eksklyuzivnyy-pamyatnik-k3",
            "name": "Эксклюзивный К-3",
            "category": "exclusive",
            "price": 2400,
            "oldPrice": 3000,
            "discount": 20,
            "variants": json.dumps(
                [
                    {"name": "Габбро-диабаз", "color": "#1b1b1b", "image": "/monuments/k-3.webp", "hit": True},
                    {
                        "name": "Дымовский",
                        "color": "#8a5a44",
                        "image": "/monuments/k-3-red.webp",
                        "price": 2700,
                        "oldPrice": 3100,
                    },
                ],
                ensure_ascii=False,
            ),
        },
    ],
}


def seed_all(store: CatalogStore | None = None) -> dict[str, list[Product]]:
    store = store or CatalogStore()
    seeded: dict[str, list[Product]] = {}
    for category, records in DEMO_CATALOG.items():
        products = [Product.model_validate(record) for record in records]
        path = store.write_records(category, records)
        logger.info("Wrote %d products to %s", len(products), path.name)
        seeded[category] = products
    return seeded


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    seed_all()
