from __future__ import annotations

from datetime import date

from carhunter.schemas.search import SearchRequest, optimization_options
from carhunter.search.sites import is_known_site

MIN_YEAR = 1990


def _max_year() -> int:
    return date.today().year + 1


def _check_year(value: int | None) -> str | None:
    if value is None:
        return None
    upper = _max_year()
    if value < MIN_YEAR or value > upper:
        return f"Årgang skal være mellem {MIN_YEAR} og {upper}."
    return None


def validate_search_request(request: SearchRequest) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not request.makes:
        errors["makes"] = "Vælg mindst ét mærke."

    year_from_error = _check_year(request.year_from)
    if year_from_error:
        errors["year_from"] = year_from_error
    year_to_error = _check_year(request.year_to)
    if year_to_error:
        errors["year_to"] = year_to_error
    if (
        not year_from_error
        and not year_to_error
        and request.year_from is not None
        and request.year_to is not None
        and request.year_from > request.year_to
    ):
        errors["year_to"] = "Til-årgang kan ikke være før fra-årgang."

    for field_name in ("max_price", "monthly_max", "downpayment_max"):
        value = getattr(request, field_name)
        if value is not None and value < 0:
            errors[field_name] = "Beløbet kan ikke være negativt."

    if request.optimization:
        allowed = {value for value, _ in optimization_options(request.effective_mode)}
        if request.optimization not in allowed:
            errors["optimization"] = "Ugyldig optimering for den valgte søgetype."

    unknown_sites = [site for site in request.sites if not is_known_site(site)]
    if unknown_sites:
        errors["sites"] = f"Ukendte sites: {', '.join(unknown_sites)}"

    return errors
