from fastapi import APIRouter, HTTPException, Query
from loguru import logger

from tvtantrum.core.config import settings
from tvtantrum.models.show import Favorite, Show
from tvtantrum.services.recommendation import recommendation_service
from tvtantrum.services.storage import show_catalog, show_repository

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


@router.get("/favorites", response_model=list[Show])
async def list_favorites(user_id: str) -> list[Show]:
    try:
        return await show_repository.get_favorite_shows(user_id)
    except Exception as e:
        logger.exception(f"[{user_id}] Error fetching favorites: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch favorites")


@router.post("/favorites/{show_id}", response_model=Favorite, status_code=201)
async def add_favorite(user_id: str, show_id: int) -> Favorite:
    if show_id not in show_catalog:
        raise HTTPException(status_code=404, detail=f"Show with ID {show_id} not found")
    try:
        await show_repository.favorites.add(user_id, show_id)
    except Exception as e:
        logger.exception(f"[{user_id}] Error adding favorite {show_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to add favorite")
    return Favorite(user_id=user_id, show_id=show_id)


@router.delete("/favorites/{show_id}", status_code=204)
async def remove_favorite(user_id: str, show_id: int) -> None:
    try:
        removed = await show_repository.favorites.remove(user_id, show_id)
    except Exception as e:
        logger.exception(f"[{user_id}] Error removing favorite {show_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to remove favorite")
    if not removed:
        raise HTTPException(status_code=404, detail=f"Show {show_id} is not in favorites")


@router.get("/recommendations", response_model=list[Show])
async def get_recommendations(
    user_id: str, limit: int = Query(default=settings.DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=50)
) -> list[Show]:
    """
    Shows similar to the user's favorites.

    Delegates to the recommendation service; data-layer failures become a 500.
    """
    try:
        return await recommendation_service.recommend_similar_shows(user_id, limit)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"[{user_id}] Error fetching recommendations: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch recommendations")
