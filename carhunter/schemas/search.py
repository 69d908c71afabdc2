from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


SearchMode = Literal["buy", "leasing"]
FuelType = Literal["benzin", "diesel", "ev", "hybrid", "phev"]

FUEL_OPTIONS: tuple[tuple[str, str], ...] = (
    ("benzin", "Benzin"),
    ("diesel", "Diesel"),
    ("ev", "El"),
    ("hybrid", "Hybrid"),
    ("phev", "Plugin Hybrid"),
)

BUY_OPTIMIZATION_OPTIONS: tuple[tuple[str, str], ...] = (
    ("laveste_pris", "Laveste pris"),
    ("bedste_værdi", "Bedste værdi"),
    ("nyeste_årgang", "Nyeste årgang"),
    ("laveste_km", "Laveste km"),
    ("bedste_udstyr", "Bedste udstyr"),
    ("hurtigste_salg", "Hurtigste salg"),
)

LEASING_OPTIMIZATION_OPTIONS: tuple[tuple[str, str], ...] = (
    ("laveste_månedlig", "Laveste månedlige"),
    ("laveste_udbetaling", "Laveste udbetaling"),
    ("bedste_værdi", "Bedste værdi"),
    ("kortest_bindingsperiode", "Kortest bindingsperiode"),
    ("bedste_service", "Bedste service"),
    ("laveste_total", "Laveste total"),
)

DEFAULT_OPTIMIZATION: dict[str, str] = {"buy": "laveste_pris", "leasing": "laveste_månedlig"}


def optimization_options(mode: str) -> tuple[tuple[str, str], ...]:
    return LEASING_OPTIMIZATION_OPTIONS if mode == "leasing" else BUY_OPTIMIZATION_OPTIONS


def optimization_label(value: str) -> str:
    for option_value, label in BUY_OPTIMIZATION_OPTIONS + LEASING_OPTIMIZATION_OPTIONS:
        if option_value == value:
            return label
    return value.replace("_", " ")


def fuel_label(value: str) -> str:
    return dict(FUEL_OPTIONS).get(value, value)


class SearchRequest(BaseModel):
    mode: SearchMode | None = None
    makes: list[str] = Field(default_factory=list)
    models: list[str] = Field(default_factory=list)
    year_from: int | None = None
    year_to: int | None = None
    fuel_types: list[FuelType] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    max_price: int | None = None
    monthly_max: int | None = None
    downpayment_max: int | None = None
    tax_paid: bool | None = None
    optimization: str | None = None
    sites: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _promote_single_make(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        make = payload.pop("make", None)
        model = payload.pop("model", None)
        if isinstance(make, str) and make.strip() and not payload.get("makes"):
            payload["makes"] = [make.strip()]
        if isinstance(model, str) and model.strip() and not payload.get("models"):
            payload["models"] = [model.strip()]
        if isinstance(payload.get("equipment"), str):
            payload["equipment"] = [item.strip() for item in payload["equipment"].split(",") if item.strip()]
        return payload

    @property
    def effective_mode(self) -> str:
        return self.mode or "buy"


class SearchFormData(BaseModel):
    mode: SearchMode = "buy"
    makes: list[str] = Field(default_factory=list)
    models: dict[str, list[str]] = Field(default_factory=dict)
    year_from: int | None = None
    year_to: int | None = None
    fuel_types: list[FuelType] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    max_price: int | None = None
    monthly_max: int | None = None
    downpayment_max: int | None = None
    tax_paid: bool | None = None
    optimization: str | None = None
    sites: list[str] = Field(default_factory=lambda: ["group:DK"])

    @model_validator(mode="after")
    def _default_optimization(self) -> "SearchFormData":
        if not self.optimization:
            self.optimization = DEFAULT_OPTIMIZATION[self.mode]
        return self

    def to_request(self) -> SearchRequest:
        all_models: list[str] = []
        for make in self.makes:
            all_models.extend(self.models.get(make, []))

        return SearchRequest(
            mode=self.mode,
            makes=list(self.makes),
            models=all_models,
            year_from=self.year_from,
            year_to=self.year_to,
            fuel_types=list(self.fuel_types),
            equipment=list(self.equipment),
            max_price=self.max_price,
            monthly_max=self.monthly_max,
            downpayment_max=self.downpayment_max,
            tax_paid=self.tax_paid,
            optimization=self.optimization,
            sites=list(self.sites),
        )


class CarResult(BaseModel):
    title: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    mileage: int | None = None
    ask_price: int | None = None
    monthly_price: int | None = None
    location: str | None = None
    url: str | None = None
    description: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    engine_size: str | None = None
    power: str | None = None
    equipment: list[str] | None = None
    images: list[str] | None = None
    dealer: str | None = None
    phone: str | None = None
    email: str | None = None


class RawResults(BaseModel):
    raw: str


class SearchResponse(BaseModel):
    ok: bool
    query: SearchRequest | None = None
    results: list[CarResult] | RawResults | None = None
    error: str | None = None
    details: Any = None
    timestamp: int | None = None
    total_found: int | None = None
    raw_total: int | None = None
    method: str | None = None
    debug: dict[str, int] | None = None
