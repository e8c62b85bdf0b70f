"""
Cross-category product name uniqueness.

Categories are scanned one at a time (never concurrently) so the number of
catalog reads per check is bounded by the number of categories. The scan stops
at the first case-insensitive match that is not the product being edited.

The check fails open: a read or parse failure reports the name as unique.
Hard uniqueness belongs to the persistence layer.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from backend.catalog import CATEGORY_KEYS
from backend.settings import read_env_float

from .sources import CatalogSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NameCheckConfig:
    """Debounce quiet period. Overridable via NAME_CHECK_* env vars."""

    debounce_seconds: float = 0.5

    @classmethod
    def from_env(cls) -> "NameCheckConfig":
        return cls(
            debounce_seconds=max(read_env_float("NAME_CHECK_DEBOUNCE_SECONDS", 0.5), 0.0),
        )


def normalize_name(value: str) -> str:
    return value.strip().lower()


def _is_excluded(record_id: Any, exclude_id: int | None) -> bool:
    if exclude_id is None or record_id is None:
        return False
    return str(record_id).strip() == str(exclude_id)


class NameUniquenessChecker:
    def __init__(
        self,
        source: CatalogSource,
        categories: Sequence[str] | None = None,
    ) -> None:
        self.source = source
        self.categories = tuple(categories) if categories is not None else CATEGORY_KEYS

    async def check(self, candidate_name: str, exclude_id: int | None = None) -> bool:
        """True when no other product in any category already uses `candidate_name`."""
        wanted = normalize_name(candidate_name)
        if not wanted:
            return True

        try:
            for category in self.categories:
                records = await self.source.fetch_category(category)
                conflict = self._find_conflict(records, wanted, exclude_id)
                if conflict is not None:
                    logger.debug(
                        "Name %r already used by product %s in %s",
                        candidate_name,
                        conflict.get("id"),
                        category,
                    )
                    return False
        except Exception as exc:
            logger.warning("Name check for %r failed, assuming unique: %s", candidate_name, exc)
            return True
        return True

    def _find_conflict(
        self,
        records: list[dict[str, Any]],
        wanted: str,
        exclude_id: int | None,
    ) -> dict[str, Any] | None:
        for record in records:
            name = record.get("name")
            if not isinstance(name, str) or normalize_name(name) != wanted:
                continue
            if _is_excluded(record.get("id"), exclude_id):
                continue
            return record
        return None
