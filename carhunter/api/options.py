from fastapi import APIRouter

from carhunter.schemas.catalog import FormOptionsResponse, OptionOut
from carhunter.schemas.search import BUY_OPTIMIZATION_OPTIONS, FUEL_OPTIONS, LEASING_OPTIMIZATION_OPTIONS
from carhunter.search.equipment import EQUIPMENT_OPTIONS
from carhunter.search.sites import SITE_OPTIONS

router = APIRouter(prefix="/api", tags=["options"])


def _pairs(options: tuple[tuple[str, str], ...]) -> list[OptionOut]:
    return [OptionOut(value=value, label=label) for value, label in options]


@router.get("/options", response_model=FormOptionsResponse, response_model_exclude_none=True)
def form_options() -> FormOptionsResponse:
    return FormOptionsResponse(
        fuel_types=_pairs(FUEL_OPTIONS),
        equipment=_pairs(EQUIPMENT_OPTIONS),
        sites=[OptionOut.model_validate(option) for option in SITE_OPTIONS],
        optimization={
            "buy": _pairs(BUY_OPTIMIZATION_OPTIONS),
            "leasing": _pairs(LEASING_OPTIMIZATION_OPTIONS),
        },
    )
