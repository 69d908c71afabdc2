from carhunter.catalog.cache import TTLCache
from carhunter.catalog.providers import CarQueryProvider, CatalogError, VpicProvider
from carhunter.catalog.service import CatalogService, build_catalog_service

__all__ = [
    "CarQueryProvider",
    "CatalogError",
    "CatalogService",
    "TTLCache",
    "VpicProvider",
    "build_catalog_service",
]
