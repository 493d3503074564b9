from fastapi import APIRouter, HTTPException, Query
from loguru import logger

from tvtantrum.core.config import settings
from tvtantrum.core.constants import MAX_STIMULATION_SCORE, MIN_STIMULATION_SCORE
from tvtantrum.models.show import Show, ShowMetrics, ShowPopularity
from tvtantrum.services.recommendation import recommendation_service
from tvtantrum.services.sensory import normalize_show_metrics
from tvtantrum.services.storage import ShowNotFoundError, show_catalog, show_repository

router = APIRouter(prefix="/shows", tags=["shows"])


def _get_show_or_404(show_id: int) -> Show:
    try:
        return show_catalog.get_or_raise(show_id)
    except ShowNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=list[Show])
async def list_shows(
    q: str | None = Query(default=None, description="Case-insensitive name filter"),
    theme: str | None = Query(default=None),
    max_stimulation: int | None = Query(default=None, ge=MIN_STIMULATION_SCORE, le=MAX_STIMULATION_SCORE),
) -> list[Show]:
    return show_catalog.search(query=q, theme=theme, max_stimulation=max_stimulation)


@router.get("/popular", response_model=list[Show])
async def popular_shows(limit: int = Query(default=settings.DEFAULT_POPULAR_SHOWS_LIMIT, ge=1, le=100)) -> list[Show]:
    try:
        return await show_repository.get_popular_shows(limit)
    except Exception as e:
        logger.exception(f"Error fetching popular TV shows: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch popular TV shows")


@router.get("/{show_id}", response_model=Show)
async def get_show(show_id: int) -> Show:
    show = _get_show_or_404(show_id)
    await show_repository.popularity.track_view(show_id)
    return show


@router.get("/{show_id}/metrics", response_model=ShowMetrics)
async def get_show_metrics(show_id: int) -> ShowMetrics:
    show = _get_show_or_404(show_id)
    return ShowMetrics(show_id=show.id, stimulation_score=show.stimulation_score, **normalize_show_metrics(show))


@router.get("/{show_id}/popularity", response_model=ShowPopularity)
async def get_show_popularity(show_id: int) -> ShowPopularity:
    _get_show_or_404(show_id)
    return await show_repository.popularity.get(show_id)


@router.post("/{show_id}/search-hit", status_code=204)
async def track_search_hit(show_id: int) -> None:
    _get_show_or_404(show_id)
    await show_repository.popularity.track_search(show_id)


@router.get("/{show_id}/similar", response_model=list[Show])
async def similar_shows(
    show_id: int, limit: int = Query(default=settings.DEFAULT_SIMILAR_SHOWS_LIMIT, ge=1, le=50)
) -> list[Show]:
    _get_show_or_404(show_id)
    try:
        return await recommendation_service.similar_to_show(show_id, limit)
    except Exception as e:
        logger.exception(f"Error fetching similar shows for {show_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch similar shows")
