import os
from dataclasses import dataclass


def _env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return value


def _optional_secret(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value and value.strip() and value.strip().lower() != "change_me":
            return value.strip()
    return None


@dataclass(frozen=True)
class Settings:
    perplexity_api_key: str | None
    perplexity_base_url: str
    perplexity_model: str
    llm_timeout_seconds: float
    llm_max_retries: int
    carquery_api_url: str
    vpic_api_url: str
    catalog_provider: str
    catalog_cache_ttl_seconds: int
    http_connect_timeout_seconds: float
    http_read_timeout_seconds: float
    http_max_retries: int
    http_backoff_seconds: float
    http_backoff_jitter_seconds: float
    direct_search_concurrency: int
    log_level: str
    host: str
    port: int

    @property
    def llm_enabled(self) -> bool:
        return self.perplexity_api_key is not None


SETTINGS = Settings(
    perplexity_api_key=_optional_secret("PERPLEXITY_API_KEY"),
    perplexity_base_url=_env("PERPLEXITY_BASE_URL", "https://api.perplexity.ai"),
    perplexity_model=_env("PERPLEXITY_MODEL", "sonar"),
    llm_timeout_seconds=float(_env("LLM_TIMEOUT_SECONDS", "60")),
    llm_max_retries=int(_env("LLM_MAX_RETRIES", "0")),
    carquery_api_url=_env("CARQUERY_API_URL", "https://www.carqueryapi.com/api/0.3/"),
    vpic_api_url=_env("VPIC_API_URL", "https://vpic.nhtsa.dot.gov/api/vehicles"),
    catalog_provider=_env("CATALOG_PROVIDER", "carquery").strip().lower(),
    catalog_cache_ttl_seconds=int(_env("CATALOG_CACHE_TTL_SECONDS", "86400")),
    http_connect_timeout_seconds=float(_env("HTTP_CONNECT_TIMEOUT_SECONDS", "5")),
    http_read_timeout_seconds=float(_env("HTTP_READ_TIMEOUT_SECONDS", "15")),
    http_max_retries=int(_env("HTTP_MAX_RETRIES", "2")),
    http_backoff_seconds=float(_env("HTTP_BACKOFF_SECONDS", "0.5")),
    http_backoff_jitter_seconds=float(_env("HTTP_BACKOFF_JITTER_SECONDS", "0.25")),
    direct_search_concurrency=int(_env("DIRECT_SEARCH_CONCURRENCY", "4")),
    log_level=_env("LOG_LEVEL", "INFO").upper(),
    host=_env("HOST", "0.0.0.0"),
    port=int(_env("PORT", "8000")),
)
