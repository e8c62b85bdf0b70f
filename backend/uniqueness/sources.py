"""
Catalog sources for the name uniqueness scan.

A source returns the raw records of one category. The checker only needs each
record's `id` and `name`, so records are not validated into Product models here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from backend.catalog import CatalogStore
from backend.settings import read_env_float, read_env_str


class CatalogSource(Protocol):
    async def fetch_category(self, category: str) -> list[dict[str, Any]]:
        ...


@dataclass(frozen=True)
class HttpCatalogConfig:
    """Catalog API location. Overridable via CATALOG_API_* env vars."""

    base_url: str = "http://localhost:8000"
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "HttpCatalogConfig":
        return cls(
            base_url=read_env_str("CATALOG_API_URL", "http://localhost:8000"),
            timeout_seconds=read_env_float("CATALOG_API_TIMEOUT_SECONDS", 10.0),
        )


def extract_records(payload: Any) -> list[dict[str, Any]]:
    """Accept a bare array or an envelope with a `data` / `products` array."""
    if isinstance(payload, dict):
        payload = payload.get("data", payload.get("products"))
    if not isinstance(payload, list):
        raise ValueError(f"Unexpected catalog payload: {type(payload).__name__}")
    return [record for record in payload if isinstance(record, dict)]


class HttpCatalogSource:
    """Reads categories from the catalog read endpoint: GET {base_url}/catalog/{category}."""

    def __init__(
        self,
        config: HttpCatalogConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or HttpCatalogConfig.from_env()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
        )

    async def fetch_category(self, category: str) -> list[dict[str, Any]]:
        response = await self._client.get(f"/catalog/{category}")
        response.raise_for_status()
        return extract_records(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()


class FileCatalogSource:
    """Adapts the JSON catalog store to the CatalogSource protocol."""

    def __init__(self, store: CatalogStore | None = None) -> None:
        self.store = store or CatalogStore()

    async def fetch_category(self, category: str) -> list[dict[str, Any]]:
        return self.store.load_records(category)
