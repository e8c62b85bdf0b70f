"""
API tests over a temporary JSON catalog seeded with the demo records.

    uv run pytest tests/test_api.py -v
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from backend.api import app
from backend.api.api import get_store
from backend.catalog import CatalogStore
from models import Product, ResolvedDisplayState
from seed import seed_all


@pytest.fixture()
def store(tmp_path: Path) -> CatalogStore:
    catalog = CatalogStore(tmp_path / "catalog")
    seed_all(catalog)
    return catalog


@pytest.fixture()
def client(store: CatalogStore):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_category_listing_decodes_stored_variants(client: TestClient) -> None:
    response = client.get("/catalog/single")

    assert response.status_code == 200
    products = [Product.model_validate(item) for item in response.json()]
    assert [p.id for p in products] == [5, 6]
    assert len(products[0].variants) == 2
    assert response.json()[0]["oldPrice"] == 600


def test_missing_category_file_is_empty(client: TestClient) -> None:
    response = client.get("/catalog/heart")

    assert response.status_code == 200
    assert response.json() == []


def test_unknown_category_returns_404(client: TestClient) -> None:
    assert client.get("/catalog/granite").status_code == 404


def test_product_detail_by_slug_or_id(client: TestClient) -> None:
    by_slug = client.get("/catalog/exclusive/eksklyuzivnyy-pamyatnik-k3")
    by_id = client.get("/catalog/exclusive/40")

    assert by_slug.status_code == 200
    assert by_slug.json() == by_id.json()
    assert client.get("/catalog/exclusive/doesnotexist").status_code == 404


def test_display_state_for_non_exclusive_variant(client: TestClient) -> None:
    response = client.get("/catalog/single/odinochnyy-o-1/display", params={"variant": 1})

    assert response.status_code == 200
    state = ResolvedDisplayState.model_validate(response.json())
    assert state.effective_price == 450
    assert state.effective_old_price == 600
    assert state.effective_discount_percent == 17
    assert state.show_hit_badge is True


def test_display_state_for_exclusive_variants(client: TestClient) -> None:
    first = ResolvedDisplayState.model_validate(
        client.get("/catalog/exclusive/40/display", params={"variant": 0}).json()
    )
    hovered = ResolvedDisplayState.model_validate(
        client.get("/catalog/exclusive/40/display", params={"variant": 0, "hovered": 1}).json()
    )

    assert first.effective_price == 2400
    assert first.show_discount_badge is False
    assert first.show_hit_badge is True
    assert hovered.effective_price == 2700
    assert hovered.effective_discount_percent == 13
    assert hovered.show_hit_badge is False


def test_display_state_price_on_request(client: TestClient) -> None:
    state = client.get("/catalog/single/odinochnyy-o-2/display").json()

    assert state["is_price_on_request"] is True
    assert state["effective_price"] is None


def test_discounted_listing(client: TestClient) -> None:
    response = client.get("/catalog/discounted")

    assert response.status_code == 200
    assert sorted(item["id"] for item in response.json()) == [5, 40]


def test_name_check(client: TestClient) -> None:
    taken = client.get("/admin/names/check", params={"name": "одиночный о-1"})
    own = client.get("/admin/names/check", params={"name": "одиночный о-1", "exclude_id": 5})
    free = client.get("/admin/names/check", params={"name": "Одиночный О-99"})

    assert taken.json() == {"unique": False}
    assert own.json() == {"unique": True}
    assert free.json() == {"unique": True}


def test_corrupt_category_file_reads_as_empty(client: TestClient, store: CatalogStore) -> None:
    store.path_for("double").write_text("{not json", encoding="utf-8")

    response = client.get("/catalog/double")

    assert response.status_code == 200
    assert response.json() == []


def test_bad_variant_entry_does_not_break_listing(client: TestClient, store: CatalogStore) -> None:
    store.write_records(
        "heart",
        [
            {
                "id": 70,
                "slug": "serdce-s-1",
                "name": "Сердце С-1",
                "category": "heart",
                "price": 900,
                "hit": "false",
                "colors": '[{"name": "Black", "price": 950}, {"name": ["broken"]}, {"name": 7}]',
            }
        ],
    )

    listing = client.get("/catalog/heart")
    display = client.get("/catalog/heart/serdce-s-1/display", params={"variant": 1})

    assert listing.status_code == 200
    assert [v["name"] for v in listing.json()[0]["variants"]] == ["Black", "7"]
    assert display.status_code == 200
    assert display.json()["show_hit_badge"] is False
