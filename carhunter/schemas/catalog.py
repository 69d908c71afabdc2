from pydantic import BaseModel


class MakesResponse(BaseModel):
    makes: list[str]
    error: str | None = None


class ModelsResponse(BaseModel):
    models: list[str]
    error: str | None = None


class OptionOut(BaseModel):
    value: str
    label: str
    isGroup: bool | None = None
    group: str | None = None


class FormOptionsResponse(BaseModel):
    fuel_types: list[OptionOut]
    equipment: list[OptionOut]
    sites: list[OptionOut]
    optimization: dict[str, list[OptionOut]]
