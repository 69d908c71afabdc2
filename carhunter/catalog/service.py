import logging
from typing import Callable

from carhunter.catalog.cache import TTLCache
from carhunter.catalog.providers import CarQueryProvider, CatalogError, VpicProvider
from carhunter.clients.http import HttpClient
from carhunter.core.config import SETTINGS


logger = logging.getLogger(__name__)

VPIC_PROVIDER = "vpic"


class CatalogService:
    def __init__(
        self,
        *,
        carquery: CarQueryProvider,
        vpic: VpicProvider,
        cache: TTLCache[list[str]] | None = None,
        default_provider: str = SETTINGS.catalog_provider,
    ) -> None:
        self._carquery = carquery
        self._vpic = vpic
        self._cache = cache if cache is not None else TTLCache(SETTINGS.catalog_cache_ttl_seconds)
        self._default_provider = default_provider

    def _resolve(
        self,
        provider: str | None,
        cache_key: tuple[str, ...],
        primary: Callable[[], list[str]],
        fallback: Callable[[], list[str]],
    ) -> list[str]:
        provider_name = (provider or self._default_provider or "carquery").strip().lower()
        key = (provider_name, *cache_key)

        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        if provider_name == VPIC_PROVIDER:
            names = fallback()
        else:
            try:
                names = primary()
            except CatalogError as exc:
                logger.warning("CarQuery failed, falling back to vPIC: %s", exc)
                names = fallback()

        self._cache.set(key, names)
        return list(names)

    def resolve_makes(self, provider: str | None = None) -> list[str]:
        return self._resolve(provider, ("makes",), self._carquery.fetch_makes, self._vpic.fetch_makes)

    def resolve_models(self, make: str, provider: str | None = None) -> list[str]:
        normalized_make = make.strip()
        return self._resolve(
            provider,
            ("models", normalized_make.lower()),
            lambda: self._carquery.fetch_models(normalized_make),
            lambda: self._vpic.fetch_models(normalized_make),
        )


def build_catalog_service(client: HttpClient | None = None) -> CatalogService:
    http_client = client or HttpClient()
    return CatalogService(carquery=CarQueryProvider(http_client), vpic=VpicProvider(http_client))
