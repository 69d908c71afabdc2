from datetime import date

from carhunter.schemas.search import SearchFormData, SearchRequest
from carhunter.validators import validate_search_request


def test_valid_request_has_no_errors() -> None:
    request = SearchRequest(
        mode="buy",
        makes=["Audi"],
        year_from=2018,
        year_to=2020,
        max_price=300_000,
        optimization="laveste_pris",
        sites=["group:DK", "mobile.de"],
    )

    assert validate_search_request(request) == {}


def test_year_range_order_and_bounds() -> None:
    reversed_range = SearchRequest(makes=["Audi"], year_from=2021, year_to=2018)
    out_of_bounds = SearchRequest(makes=["Audi"], year_from=1980, year_to=date.today().year + 5)

    assert set(validate_search_request(reversed_range)) == {"year_to"}
    assert set(validate_search_request(out_of_bounds)) == {"year_from", "year_to"}


def test_negative_prices_and_missing_makes() -> None:
    request = SearchRequest(mode="leasing", monthly_max=-1, downpayment_max=-5)

    errors = validate_search_request(request)

    assert set(errors) == {"makes", "monthly_max", "downpayment_max"}


def test_optimization_must_match_mode() -> None:
    leasing_with_buy_goal = SearchRequest(mode="leasing", makes=["Tesla"], optimization="laveste_km")
    shared_goal = SearchRequest(mode="leasing", makes=["Tesla"], optimization="bedste_værdi")

    assert "optimization" in validate_search_request(leasing_with_buy_goal)
    assert validate_search_request(shared_goal) == {}


def test_unknown_sites_are_reported() -> None:
    request = SearchRequest(makes=["Audi"], sites=["bilbasen.dk", "cars.com", "group:US"])

    errors = validate_search_request(request)

    assert errors == {"sites": "Ukendte sites: cars.com, group:US"}


def test_form_defaults_pass_validation_in_both_modes() -> None:
    leasing = SearchFormData(mode="leasing", makes=["Audi"]).to_request()
    buy = SearchFormData(makes=["Audi"]).to_request()

    assert leasing.optimization == "laveste_månedlig"
    assert buy.optimization == "laveste_pris"
    assert validate_search_request(leasing) == {}
    assert validate_search_request(buy) == {}


def test_form_keeps_explicit_optimization() -> None:
    request = SearchFormData(mode="leasing", makes=["Audi"], optimization="laveste_total").to_request()

    assert request.optimization == "laveste_total"
