from carhunter.schemas.search import SearchRequest, fuel_label, optimization_label
from carhunter.search.equipment import equipment_label, expand_equipment_terms
from carhunter.search.sites import expand_site_selection


def _format_kr(value: int) -> str:
    return f"{value:,}".replace(",", ".") + " kr"


def _year_text(year_from: int | None, year_to: int | None) -> str:
    if year_from and year_to:
        return f" fra {year_from} til {year_to}"
    if year_from:
        return f" fra {year_from} eller nyere"
    if year_to:
        return f" til og med {year_to}"
    return ""


def _price_text(request: SearchRequest) -> str:
    if request.effective_mode == "leasing":
        parts: list[str] = []
        if request.monthly_max:
            parts.append(f"maksimal månedlig ydelse {_format_kr(request.monthly_max)}")
        if request.downpayment_max:
            parts.append(f"maksimal udbetaling {_format_kr(request.downpayment_max)}")
        return f" med {' og '.join(parts)}" if parts else ""

    if request.max_price:
        return f" med maksimal pris {_format_kr(request.max_price)}"
    return ""


def _vehicle_text(request: SearchRequest) -> str:
    makes = ", ".join(request.makes)
    if request.models:
        return f"{makes} ({', '.join(request.models)})"
    return makes


def _result_template(mode: str) -> str:
    price_line = '    "monthly_price": månedlig_ydelse_i_kr,' if mode == "leasing" else '    "ask_price": pris_i_kr,'
    return "\n".join(
        [
            "[",
            "  {",
            '    "title": "bil titel",',
            '    "url": "direkte link til annoncen",',
            price_line,
            '    "year": årstal,',
            '    "mileage": kilometer,',
            '    "location": "by/område",',
            '    "fuel_type": "brændstof",',
            '    "transmission": "gearkasse"',
            "  }",
            "]",
        ]
    )


def build_search_prompt(request: SearchRequest) -> str:
    mode = request.effective_mode
    sites = expand_site_selection(request.sites)
    goal = "leasingtilbud på" if mode == "leasing" else "brugte biler til salg af typen"

    lines = [
        f"Som bilkøber-assistent skal du søge efter {goal} {_vehicle_text(request)}"
        f"{_year_text(request.year_from, request.year_to)}{_price_text(request)}"
        f" på følgende bilsites: {', '.join(sites)}."
    ]

    details: list[str] = []
    if request.fuel_types:
        details.append(f"Brændstof: {', '.join(fuel_label(fuel) for fuel in request.fuel_types)}.")
    if request.equipment:
        labels = [equipment_label(item) for item in request.equipment]
        details.append(f"Udstyr: {', '.join(labels)}. Søgemønster: {expand_equipment_terms(labels)}.")
    if request.tax_paid is True:
        details.append("Kun biler med betalt registreringsafgift.")
    elif request.tax_paid is False:
        details.append("Biler uden betalt registreringsafgift må gerne medtages.")
    if request.optimization:
        details.append(f"Prioritér resultaterne efter: {optimization_label(request.optimization).lower()}.")
    if details:
        lines.append("")
        lines.extend(details)

    lines.extend(
        [
            "",
            "Søg kun på de specificerede sites og returner kun direkte links til konkrete annoncer, "
            "ikke søgesider eller forsider. Returner resultater i JSON format med følgende struktur:",
            _result_template(mode),
            "",
            "Hvis JSON ikke er muligt, giv da et kort tekstsvar med de bedste fund.",
        ]
    )
    return "\n".join(lines)
