from fastapi import APIRouter, Query
from pydantic import BaseModel

from tvtantrum.models.sensory import NormalizedLevel, UnrecognizedLevel
from tvtantrum.services.sensory import classify_sensory_level, unrecognized_reporter

router = APIRouter(prefix="/sensory", tags=["sensory"])


class NormalizeResponse(BaseModel):
    raw: str | None
    level: NormalizedLevel | None
    recognized: bool


@router.get("/levels", response_model=list[NormalizedLevel])
async def list_levels() -> list[NormalizedLevel]:
    return list(NormalizedLevel)


@router.get("/normalize", response_model=NormalizeResponse)
async def normalize(value: str | None = Query(default=None)) -> NormalizeResponse:
    """Classify an ad-hoc value. Lookups are not tallied as unrecognized catalog data."""
    result = classify_sensory_level(value)
    if result is None:
        return NormalizeResponse(raw=value, level=None, recognized=True)
    return NormalizeResponse(raw=value, level=result.level, recognized=result.recognized)


@router.get("/unrecognized", response_model=list[UnrecognizedLevel])
async def list_unrecognized(limit: int | None = Query(default=None, ge=1)) -> list[UnrecognizedLevel]:
    """Raw values that fell back to Moderate, most frequent first."""
    return unrecognized_reporter.get_unrecognized(limit)
