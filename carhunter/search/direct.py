import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date
from typing import Callable
from urllib.parse import quote, urlencode

from carhunter.core.config import SETTINGS
from carhunter.schemas.search import CarResult, SearchRequest
from carhunter.search.sites import GROUP_PREFIX


logger = logging.getLogger(__name__)

DEFAULT_YEAR_FROM = 2010
DEFAULT_MAX_PRICE = 1_000_000


@dataclass(frozen=True)
class DirectSource:
    domain: str
    groups: tuple[str, ...]
    search: Callable[[SearchRequest], list[CarResult]]

    def is_selected(self, sites: list[str]) -> bool:
        if not sites:
            return True
        return self.domain in sites or any(f"{GROUP_PREFIX}{group}" in sites for group in self.groups)


@dataclass
class DirectSearchOutcome:
    results: list[CarResult]
    sites_searched: int
    raw_results: int

    @property
    def duplicates_removed(self) -> int:
        return self.raw_results - len(self.results)


def build_bilbasen_search_url(request: SearchRequest) -> str:
    params = {
        "YearFrom": request.year_from or DEFAULT_YEAR_FROM,
        "YearTo": request.year_to or date.today().year,
        "PriceFrom": 0,
        "PriceTo": request.max_price or DEFAULT_MAX_PRICE,
        "Make": ",".join(request.makes).lower(),
    }
    return f"https://www.bilbasen.dk/brugt/bil?{urlencode(params)}"


def search_bilbasen(request: SearchRequest) -> list[CarResult]:
    make = request.makes[0]
    slug = quote(make.lower())
    logger.info("Searching Bilbasen: %s", build_bilbasen_search_url(request))

    return [
        CarResult(
            title=f"{make} A4 2.0 TDI",
            url=f"https://www.bilbasen.dk/brugt/bil/{slug}/12345678",
            ask_price=245_000,
            year=2020,
            mileage=85_000,
            location="København",
            fuel_type="Diesel",
            transmission="Automatgear",
        ),
        CarResult(
            title=f"{make} Q5 3.0 TDI",
            url=f"https://www.bilbasen.dk/brugt/bil/{slug}/12345679",
            ask_price=385_000,
            year=2021,
            mileage=65_000,
            location="Aarhus",
            fuel_type="Diesel",
            transmission="Automatgear",
        ),
    ]


def search_dba(request: SearchRequest) -> list[CarResult]:
    make = request.makes[0]
    return [
        CarResult(
            title=f"{make} A3 1.6 TDI",
            url=f"https://www.dba.dk/bil/{quote(make.lower())}-a3/id-1234567890",
            ask_price=165_000,
            year=2019,
            mileage=125_000,
            location="Odense",
            fuel_type="Diesel",
            transmission="Manuelt gear",
        )
    ]


def search_autouncle(request: SearchRequest) -> list[CarResult]:
    make = request.makes[0]
    return [
        CarResult(
            title=f"{make} e-tron 55 quattro",
            url=f"https://www.autouncle.dk/da/brugte-biler/{quote(make)}/e-tron",
            ask_price=425_000,
            year=2022,
            mileage=45_000,
            location="Aalborg",
            fuel_type="El",
            transmission="Automatgear",
        )
    ]


DIRECT_SOURCES: tuple[DirectSource, ...] = (
    DirectSource("bilbasen.dk", ("DK",), search_bilbasen),
    DirectSource("dba.dk", ("DK",), search_dba),
    DirectSource("autouncle.dk", ("DK",), search_autouncle),
)


def _run_source(source: DirectSource, request: SearchRequest) -> list[CarResult]:
    try:
        return source.search(request)
    except Exception:
        logger.exception("%s search error", source.domain)
        return []


def dedupe_by_url(results: list[CarResult]) -> list[CarResult]:
    seen: set[str | None] = set()
    unique: list[CarResult] = []
    for result in results:
        if result.url in seen:
            continue
        seen.add(result.url)
        unique.append(result)
    return unique


_SORT_FIELDS: dict[str, tuple[str, bool]] = {
    "laveste_pris": ("ask_price", False),
    "laveste_månedlig": ("monthly_price", False),
    "nyeste_årgang": ("year", True),
    "laveste_km": ("mileage", False),
}


def sort_results(results: list[CarResult], optimization: str | None) -> list[CarResult]:
    sort_field = _SORT_FIELDS.get(optimization or "")
    if sort_field is None:
        return list(results)

    field_name, descending = sort_field
    present = [result for result in results if getattr(result, field_name) is not None]
    missing = [result for result in results if getattr(result, field_name) is None]
    present.sort(key=lambda result: getattr(result, field_name), reverse=descending)
    return present + missing


def run_direct_search(
    request: SearchRequest,
    *,
    sources: tuple[DirectSource, ...] = DIRECT_SOURCES,
    concurrency: int = SETTINGS.direct_search_concurrency,
) -> DirectSearchOutcome:
    selected = [source for source in sources if source.is_selected(request.sites)]
    if not selected:
        return DirectSearchOutcome(results=[], sites_searched=0, raw_results=0)

    per_source: list[list[CarResult]] = [[] for _ in selected]
    with ThreadPoolExecutor(max_workers=max(1, min(concurrency, len(selected)))) as executor:
        future_to_index = {
            executor.submit(_run_source, source, request): index for index, source in enumerate(selected)
        }
        for future in as_completed(future_to_index):
            per_source[future_to_index[future]] = future.result()

    all_results = [result for results in per_source for result in results]
    unique = sort_results(dedupe_by_url(all_results), request.optimization)

    logger.info(
        "Direct search completed: sources=%s raw=%s unique=%s",
        len(selected),
        len(all_results),
        len(unique),
    )
    return DirectSearchOutcome(results=unique, sites_searched=len(selected), raw_results=len(all_results))
