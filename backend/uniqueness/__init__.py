from .checker import NameCheckConfig, NameUniquenessChecker
from .scheduler import GenerationCounter, NameCheckScheduler
from .sources import CatalogSource, FileCatalogSource, HttpCatalogConfig, HttpCatalogSource

__all__ = [
    "CatalogSource",
    "FileCatalogSource",
    "GenerationCounter",
    "HttpCatalogConfig",
    "HttpCatalogSource",
    "NameCheckConfig",
    "NameCheckScheduler",
    "NameUniquenessChecker",
]
