from functools import lru_cache

from carhunter.catalog.service import CatalogService, build_catalog_service
from carhunter.search.llm_client import PerplexityClient


@lru_cache(maxsize=1)
def get_catalog_service() -> CatalogService:
    return build_catalog_service()


@lru_cache(maxsize=1)
def get_llm_client() -> PerplexityClient:
    return PerplexityClient()
