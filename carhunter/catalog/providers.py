from typing import Any
from urllib.parse import quote

from carhunter.clients.http import HttpClient, HttpRequestError
from carhunter.core.config import SETTINGS


class CatalogError(Exception):
    def __init__(self, message: str, *, provider: str) -> None:
        super().__init__(message)
        self.provider = provider


def _collect_names(payload: Any, collection_key: str, name_key: str, *, provider: str) -> list[str]:
    if not isinstance(payload, dict):
        raise CatalogError(f"Invalid {provider} response format", provider=provider)

    items = payload.get(collection_key)
    if not isinstance(items, list):
        raise CatalogError(f"Invalid {provider} response format", provider=provider)

    names: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get(name_key)
        if isinstance(name, str) and name.strip():
            names.append(name)
    return sorted(names)


class CarQueryProvider:
    name = "carquery"

    def __init__(self, client: HttpClient, base_url: str = SETTINGS.carquery_api_url) -> None:
        self._client = client
        self._base_url = base_url

    def _fetch(self, params: dict[str, str]) -> Any:
        try:
            return self._client.get_json(self._base_url, params=params)
        except HttpRequestError as exc:
            raise CatalogError(f"CarQuery API error: {exc}", provider=self.name) from exc

    def fetch_makes(self) -> list[str]:
        payload = self._fetch({"cmd": "getMakes", "sold_in_us": "0"})
        return _collect_names(payload, "Makes", "make_display", provider=self.name)

    def fetch_models(self, make: str) -> list[str]:
        payload = self._fetch({"cmd": "getModels", "make": make})
        return _collect_names(payload, "Models", "model_name", provider=self.name)


class VpicProvider:
    name = "vpic"

    def __init__(self, client: HttpClient, base_url: str = SETTINGS.vpic_api_url) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    def _fetch(self, path: str) -> Any:
        url = f"{self._base_url}/{path}"
        try:
            return self._client.get_json(url, params={"format": "json"})
        except HttpRequestError as exc:
            raise CatalogError(f"vPIC API error: {exc}", provider=self.name) from exc

    def fetch_makes(self) -> list[str]:
        payload = self._fetch("GetAllMakes")
        return _collect_names(payload, "Results", "Make_Name", provider=self.name)

    def fetch_models(self, make: str) -> list[str]:
        payload = self._fetch(f"GetModelsForMake/{quote(make, safe='')}")
        return _collect_names(payload, "Results", "Model_Name", provider=self.name)
