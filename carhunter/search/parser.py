"""Turn free-form LLM search output into validated car listings.

The model is asked for a JSON array but answers in many shapes: bare JSON,
JSON inside markdown code fences, JSON surrounded by prose, or prose only.
``extract_listings`` finds the listing array, ``validate_listings`` keeps only
entries that point at an individual advert on one of the selected sites.
"""

import json
import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable
from urllib.parse import urlsplit, urlunsplit

from carhunter.schemas.search import CarResult
from carhunter.search.sites import ALL_SITES, expand_site_selection


logger = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```[a-zA-Z0-9_-]*[ \t]*\n?(.*?)```", re.DOTALL)
LONG_DIGITS_RE = re.compile(r"\d{4,}")
DECIMAL_TAIL_RE = re.compile(r"[.,]\d{1,2}(?!\d)")
NON_DIGIT_RE = re.compile(r"\D")
PRICE_DASH_RE = re.compile(r"[.,]-")
MILLIONS_RE = re.compile(r"mio\b|mia\b|million", re.IGNORECASE)

LISTING_COLLECTION_KEYS = ("results", "listings", "cars", "items", "data")

SEARCH_PATH_SEGMENTS = {"search", "soeg", "sog", "søg", "results", "resultater", "find", "filter", "soegning"}
PLACEHOLDER_MARKERS = ("example", "xxx", "placeholder", "...", "{", "}", "[", "]", "<", ">")
MIN_LISTING_YEAR = 1900

INT_FIELDS = ("year", "mileage", "ask_price", "monthly_price")
TEXT_FIELDS = (
    "title",
    "make",
    "model",
    "location",
    "description",
    "fuel_type",
    "transmission",
    "engine_size",
    "power",
    "dealer",
    "phone",
    "email",
)
LIST_FIELDS = ("equipment", "images")


@dataclass
class ParsedContent:
    listings: list[Any] | None
    raw: str
    strategy: str


@dataclass
class ValidationReport:
    results: list[CarResult] = field(default_factory=list)
    raw_total: int = 0
    rejected: Counter = field(default_factory=Counter)

    @property
    def total_found(self) -> int:
        return len(self.results)


@dataclass
class NormalizedResponse:
    results: list[CarResult] | None
    raw: str | None
    raw_total: int
    strategy: str
    rejected: dict[str, int]

    @property
    def total_found(self) -> int:
        return len(self.results) if self.results is not None else 0


def _listings_from_value(value: Any) -> list[Any] | None:
    if isinstance(value, list):
        return value

    if not isinstance(value, dict):
        return None

    for key in LISTING_COLLECTION_KEYS:
        collection = value.get(key)
        if isinstance(collection, list):
            return collection

    if "url" in value or "title" in value:
        return [value]

    return None


def _parse_json_listings(text: str) -> list[Any] | None:
    candidate = text.strip()
    if not candidate:
        return None
    try:
        value = json.loads(candidate)
    except ValueError:
        return None
    return _listings_from_value(value)


def _scan_embedded_listings(text: str) -> list[Any] | None:
    decoder = json.JSONDecoder()

    for opener in ("[", "{"):
        start = text.find(opener)
        while start != -1:
            try:
                value, _ = decoder.raw_decode(text, start)
            except ValueError:
                value = None

            listings = _listings_from_value(value) if value is not None else None
            # Citation markers like "[1]" decode as lists; only lists of objects count.
            if listings and any(isinstance(item, dict) for item in listings):
                return listings

            start = text.find(opener, start + 1)

    return None


def extract_listings(content: str) -> ParsedContent:
    listings = _parse_json_listings(content)
    if listings is not None:
        return ParsedContent(listings=listings, raw=content, strategy="json")

    for block in FENCED_BLOCK_RE.findall(content):
        listings = _parse_json_listings(block)
        if listings is not None:
            return ParsedContent(listings=listings, raw=content, strategy="fenced")

    listings = _scan_embedded_listings(content)
    if listings is not None:
        return ParsedContent(listings=listings, raw=content, strategy="embedded")

    return ParsedContent(listings=None, raw=content, strategy="raw")


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(round(value)) if value >= 0 else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    # "1,5 mio. kr" cannot be read as a plain amount.
    if text.startswith("-") or MILLIONS_RE.search(text):
        return None

    # Danish prices are written "245.000,-".
    text = DECIMAL_TAIL_RE.sub("", PRICE_DASH_RE.sub("", text))
    digits = NON_DIGIT_RE.sub("", text)
    if not digits:
        return None
    return int(digits)


def _to_clean_str(value: Any) -> str | None:
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _to_clean_list(value: Any) -> list[str] | None:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return None
    cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return cleaned or None


def _valid_year(value: int | None) -> int | None:
    if value is None:
        return None
    if value < MIN_LISTING_YEAR or value > date.today().year + 1:
        return None
    return value


def host_matches(host: str, allowed_sites: Iterable[str]) -> bool:
    host = host.lower().rstrip(".")
    for site in allowed_sites:
        domain = site.lower()
        if host == domain or host.endswith(f".{domain}"):
            return True
    return False


def looks_like_listing_url(url: str) -> bool:
    parts = urlsplit(url)
    lowered = url.lower()
    if any(marker in lowered for marker in PLACEHOLDER_MARKERS):
        return False

    segments = [segment for segment in parts.path.lower().split("/") if segment]
    if not segments:
        return False

    for segment in segments:
        stem = segment.rsplit(".", 1)[0]
        if stem in SEARCH_PATH_SEGMENTS or stem.startswith("search"):
            return False

    return any(LONG_DIGITS_RE.search(segment) for segment in segments) or len(segments) >= 2


def normalize_url(url: str) -> str:
    parts = urlsplit(url.strip())
    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    path = parts.path.rstrip("/")
    return urlunsplit((parts.scheme.lower(), host, path, parts.query, ""))


def _build_result(item: dict[str, Any]) -> CarResult:
    fields: dict[str, Any] = {}
    for name in TEXT_FIELDS:
        fields[name] = _to_clean_str(item.get(name))
    for name in INT_FIELDS:
        fields[name] = _to_int(item.get(name))
    for name in LIST_FIELDS:
        fields[name] = _to_clean_list(item.get(name))

    fields["year"] = _valid_year(fields["year"])
    fields["title"] = item["title"].strip()
    fields["url"] = item["url"].strip()
    return CarResult(**fields)


def _non_empty_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _rejection_reason(item: Any, allowed_sites: Iterable[str]) -> str | None:
    if not isinstance(item, dict):
        return "not_object"

    url = _non_empty_str(item.get("url"))
    if url is None or _non_empty_str(item.get("title")) is None:
        return "missing_fields"

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return "bad_url"
    if parts.scheme.lower() not in {"http", "https"} or not hostname:
        return "bad_url"

    if not host_matches(hostname, allowed_sites):
        return "domain_not_allowed"

    if not looks_like_listing_url(url):
        return "not_listing_url"

    return None


def validate_listings(items: list[Any], allowed_sites: Iterable[str] | None = None) -> ValidationReport:
    sites = list(allowed_sites or ()) or list(ALL_SITES)
    report = ValidationReport(raw_total=len(items))
    seen: set[str] = set()

    for item in items:
        reason = _rejection_reason(item, sites)
        if reason is not None:
            report.rejected[reason] += 1
            continue

        key = normalize_url(item["url"])
        if key in seen:
            report.rejected["duplicate"] += 1
            continue
        seen.add(key)
        report.results.append(_build_result(item))

    if report.rejected:
        logger.info(
            "Filtered %s of %s listings: %s",
            sum(report.rejected.values()),
            report.raw_total,
            dict(report.rejected),
        )

    return report


def normalize_llm_response(content: str, selected_sites: Iterable[str] | None = None) -> NormalizedResponse:
    parsed = extract_listings(content)
    if parsed.listings is None:
        logger.info("No JSON listings found in LLM response, returning raw text.")
        return NormalizedResponse(results=None, raw=content, raw_total=0, strategy=parsed.strategy, rejected={})

    allowed_sites = expand_site_selection(selected_sites or ())
    report = validate_listings(parsed.listings, allowed_sites)
    return NormalizedResponse(
        results=report.results,
        raw=None,
        raw_total=report.raw_total,
        strategy=parsed.strategy,
        rejected=dict(report.rejected),
    )
