import json

import pytest

from carhunter.search.parser import (
    extract_listings,
    looks_like_listing_url,
    normalize_llm_response,
    normalize_url,
    validate_listings,
)


BILBASEN_A4 = {
    "title": "Audi A4 2.0 TDI",
    "url": "https://www.bilbasen.dk/brugt/bil/audi/a4/4567890",
    "ask_price": "245.000 kr",
    "year": "2020",
    "mileage": "85.000 km",
    "location": "København",
}


def test_extract_listings_pure_json_array() -> None:
    parsed = extract_listings(json.dumps([BILBASEN_A4]))

    assert parsed.strategy == "json"
    assert parsed.listings == [BILBASEN_A4]


def test_extract_listings_unwraps_results_object() -> None:
    parsed = extract_listings(json.dumps({"results": [BILBASEN_A4], "note": "2 fund"}))

    assert parsed.strategy == "json"
    assert parsed.listings == [BILBASEN_A4]


def test_extract_listings_from_fenced_code_block() -> None:
    content = (
        "Her er de bedste fund:\n"
        "```json\n"
        '[{"title": "VW Golf 1.5 TSI", "url": "https://www.dba.dk/bil/vw-golf/id-1234567890"}]\n'
        "```\n"
        "God fornøjelse med søgningen."
    )

    parsed = extract_listings(content)

    assert parsed.strategy == "fenced"
    assert parsed.listings == [{"title": "VW Golf 1.5 TSI", "url": "https://www.dba.dk/bil/vw-golf/id-1234567890"}]


def test_extract_listings_from_bare_fenced_block() -> None:
    content = 'Resultater:\n```\n[{"title": "Skoda Octavia", "url": "https://www.dba.dk/bil/skoda/id-7777777"}]\n```'

    parsed = extract_listings(content)

    assert parsed.strategy == "fenced"
    assert parsed.listings == [{"title": "Skoda Octavia", "url": "https://www.dba.dk/bil/skoda/id-7777777"}]


@pytest.mark.parametrize("key", ["listings", "cars", "items", "data"])
def test_extract_listings_unwraps_other_collection_keys(key: str) -> None:
    parsed = extract_listings(json.dumps({key: [BILBASEN_A4]}))

    assert parsed.strategy == "json"
    assert parsed.listings == [BILBASEN_A4]


def test_extract_listings_wrong_shape_json_falls_through() -> None:
    assert extract_listings(json.dumps({"foo": 1})).strategy == "raw"

    content = '{"foo": 1}\n```json\n[{"title": "Audi A3", "url": "https://www.dba.dk/bil/audi/id-5555555"}]\n```'
    parsed = extract_listings(content)

    assert parsed.strategy == "fenced"
    assert parsed.listings == [{"title": "Audi A3", "url": "https://www.dba.dk/bil/audi/id-5555555"}]


def test_extract_listings_single_object_in_prose() -> None:
    content = (
        "Det bedste match er "
        '{"title": "BMW 320d", "url": "https://www.bilbasen.dk/brugt/bil/bmw/3201234"} '
        "ifølge min søgning."
    )

    parsed = extract_listings(content)

    assert parsed.strategy == "embedded"
    assert parsed.listings == [{"title": "BMW 320d", "url": "https://www.bilbasen.dk/brugt/bil/bmw/3201234"}]


def test_extract_listings_results_object_in_prose() -> None:
    content = 'Her er svaret: {"results": [' + json.dumps(BILBASEN_A4) + "]} Held og lykke."

    parsed = extract_listings(content)

    assert parsed.strategy == "embedded"
    assert parsed.listings == [BILBASEN_A4]


def test_extract_listings_skips_citation_markers_in_prose() -> None:
    content = (
        "Jeg fandt følgende biler [1]: "
        '[{"title": "Audi Q5", "url": "https://www.bilbasen.dk/brugt/bil/audi/q5/7654321"}] '
        "Kilde [2]."
    )

    parsed = extract_listings(content)

    assert parsed.strategy == "embedded"
    assert parsed.listings == [{"title": "Audi Q5", "url": "https://www.bilbasen.dk/brugt/bil/audi/q5/7654321"}]


def test_extract_listings_falls_back_to_raw_text() -> None:
    content = "Desværre kunne jeg ikke finde nogen biler, der matcher [1]."

    parsed = extract_listings(content)

    assert parsed.strategy == "raw"
    assert parsed.listings is None
    assert parsed.raw == content


def test_validate_listings_filters_and_counts_rejections() -> None:
    items = [
        BILBASEN_A4,
        {"title": "Audi A4 igen", "url": "https://bilbasen.dk/brugt/bil/audi/a4/4567890/"},
        {"title": "Mobile", "url": "https://suchen.mobile.de/fahrzeuge/details.html?id=123456789"},
        {"title": "Søgeside", "url": "https://www.bilbasen.dk/soeg?YearFrom=2018"},
        {"title": "Uden link"},
        "bare en tekst",
        {"title": "Ftp", "url": "ftp://www.bilbasen.dk/brugt/bil/1234567"},
        {"title": "Eksempel", "url": "https://www.bilbasen.dk/brugt/bil/example/1234567"},
    ]

    report = validate_listings(items, ["bilbasen.dk", "dba.dk"])

    assert report.raw_total == 8
    assert report.total_found == 1
    assert report.rejected == {
        "duplicate": 1,
        "domain_not_allowed": 1,
        "not_listing_url": 2,
        "missing_fields": 1,
        "not_object": 1,
        "bad_url": 1,
    }

    result = report.results[0]
    assert result.url == BILBASEN_A4["url"]
    assert result.ask_price == 245_000
    assert result.year == 2020
    assert result.mileage == 85_000
    assert result.location == "København"


def test_validate_listings_rejects_lookalike_domains() -> None:
    items = [
        {"title": "Falsk", "url": "https://www.bilbasen.dk.evil.com/brugt/bil/audi/1234567"},
        {"title": "Falsk 2", "url": "https://notbilbasen.dk/brugt/bil/audi/1234567"},
        {"title": "Ægte", "url": "https://m.bilbasen.dk/brugt/bil/audi/1234567"},
    ]

    report = validate_listings(items, ["bilbasen.dk"])

    assert [result.title for result in report.results] == ["Ægte"]
    assert report.rejected == {"domain_not_allowed": 2}


def test_validate_listings_requires_string_title() -> None:
    items = [
        {"make": "Audi", "model": "A6", "year": 2019, "url": "https://www.bilbasen.dk/brugt/bil/audi/a6/1112223"},
        {"title": 5, "url": "https://www.bilbasen.dk/brugt/bil/audi/a6/1112224"},
        {"title": "   ", "url": "https://www.bilbasen.dk/brugt/bil/audi/a6/1112225"},
        {"title": "Audi A6", "url": 1112226},
    ]

    report = validate_listings(items, ["bilbasen.dk"])

    assert report.results == []
    assert report.rejected == {"missing_fields": 4}


def test_validate_listings_drops_year_out_of_range() -> None:
    items = [{"title": "Fremtidsbil", "year": 3020, "url": "https://www.bilbasen.dk/brugt/bil/audi/a8/1112224"}]

    report = validate_listings(items, ["bilbasen.dk"])

    assert report.results[0].year is None


def test_validate_listings_reads_danish_price_formats() -> None:
    items = [
        {"title": "Kr-streg", "url": "https://www.bilbasen.dk/brugt/bil/audi/1000001", "ask_price": "245.000,-"},
        {"title": "Med kr", "url": "https://www.bilbasen.dk/brugt/bil/audi/1000002", "ask_price": "189.900,- kr."},
        {"title": "Decimaler", "url": "https://www.bilbasen.dk/brugt/bil/audi/1000003", "monthly_price": "3.499,00 kr/md"},
        {"title": "Millioner", "url": "https://www.bilbasen.dk/brugt/bil/audi/1000004", "ask_price": "1,5 mio. kr"},
        {"title": "Negativ", "url": "https://www.bilbasen.dk/brugt/bil/audi/1000005", "ask_price": "-5000"},
    ]

    results = validate_listings(items, ["bilbasen.dk"]).results

    assert [result.ask_price for result in results] == [245_000, 189_900, None, None, None]
    assert results[2].monthly_price == 3_499


def test_validate_listings_without_sites_allows_all_known_sites() -> None:
    items = [
        {"title": "Mobile", "url": "https://suchen.mobile.de/fahrzeuge/details.html?id=123456789"},
        {"title": "Ukendt", "url": "https://www.cars.example.org/listing/1234567"},
    ]

    report = validate_listings(items)

    assert [result.title for result in report.results] == ["Mobile"]


def test_looks_like_listing_url() -> None:
    assert looks_like_listing_url("https://www.dba.dk/bil/audi-a3/id-1234567890")
    assert looks_like_listing_url("https://www.autouncle.dk/da/brugte-biler/Audi/e-tron")
    assert not looks_like_listing_url("https://www.bilbasen.dk/")
    assert not looks_like_listing_url("https://www.bilbasen.dk/brugt")
    assert not looks_like_listing_url("https://www.autoscout24.com/search/audi?sort=price")
    assert not looks_like_listing_url("https://www.biltorvet.dk/soeg/audi/1234567")
    assert not looks_like_listing_url("https://www.bilbasen.dk/brugt/bil/{id}")


def test_looks_like_listing_url_two_segments_or_long_digits() -> None:
    assert looks_like_listing_url("https://www.dba.dk/biler/vw-golf-variant")
    assert looks_like_listing_url("https://www.bilbasen.dk/1234567")
    assert not looks_like_listing_url("https://www.dba.dk/bil?id=1234567")
    assert not looks_like_listing_url("https://www.dba.dk/vw-golf-variant-1-5-tsi-style-dsg")


def test_normalize_url_ignores_www_fragment_and_trailing_slash() -> None:
    assert normalize_url("HTTPS://WWW.Bilbasen.dk/brugt/bil/1234567/#billeder") == normalize_url(
        "https://bilbasen.dk/brugt/bil/1234567"
    )


def test_normalize_llm_response_expands_site_groups() -> None:
    content = json.dumps(
        [
            BILBASEN_A4,
            {"title": "Mobile", "url": "https://suchen.mobile.de/fahrzeuge/details.html?id=123456789"},
        ]
    )

    normalized = normalize_llm_response(content, ["group:DK"])

    assert normalized.raw is None
    assert normalized.raw_total == 2
    assert normalized.total_found == 1
    assert normalized.rejected == {"domain_not_allowed": 1}


def test_normalize_llm_response_returns_raw_text_when_nothing_parses() -> None:
    normalized = normalize_llm_response("Ingen resultater.", ["group:DK"])

    assert normalized.results is None
    assert normalized.raw == "Ingen resultater."
    assert normalized.total_found == 0
