from loguru import logger

from tvtantrum.core.config import settings
from tvtantrum.models.show import Show
from tvtantrum.services.recommendation.constants import STIMULATION_WINDOW
from tvtantrum.services.recommendation.engine import score_candidates, validate_limit
from tvtantrum.services.recommendation.profile import TasteProfileBuilder
from tvtantrum.services.recommendation.similar import ShowSimilarity
from tvtantrum.services.storage.repository import ShowRepository, show_repository


class RecommendationService:
    """
    Facade over the storage collaborator and the pure ranking code.

    Storage errors are not retried or swallowed here; callers decide what
    the user sees.
    """

    def __init__(self, repository: ShowRepository):
        self.repository = repository
        self.profile_builder = TasteProfileBuilder()

    async def recommend_similar_shows(self, user_id: str, limit: int | None = None) -> list[Show]:
        """
        Shows closest to the user's taste profile, excluding their favorites.

        Users without favorites get the most popular shows instead.
        """
        limit = settings.DEFAULT_RECOMMENDATION_LIMIT if limit is None else limit
        validate_limit(limit)

        favorites = await self.repository.get_favorite_shows(user_id)
        if not favorites:
            logger.info(f"[{user_id}] No favorites; returning {limit} popular shows")
            return await self.repository.get_popular_shows(limit)

        profile = self.profile_builder.build(favorites)
        low, high = profile.stimulation_range(STIMULATION_WINDOW)
        candidates = await self.repository.get_catalog_shows_in_stimulation_range(
            low, high, excluding=profile.favorite_ids
        )

        ranked = score_candidates(profile, candidates)[:limit]
        logger.info(
            f"[{user_id}] Recommended {len(ranked)} of {len(candidates)} candidates "
            f"(avg stimulation {profile.avg_stimulation_score}, common themes {sorted(profile.common_themes)})"
        )
        return [item.show for item in ranked]

    async def similar_to_show(self, show_id: int, limit: int | None = None) -> list[Show]:
        """Shows most like a single reference show; empty for an unknown id."""
        limit = settings.DEFAULT_SIMILAR_SHOWS_LIMIT if limit is None else limit
        validate_limit(limit)

        reference = await self.repository.get_show(show_id)
        if reference is None:
            logger.info(f"Show with ID {show_id} not found - can't find similar shows")
            return []
        ranked = ShowSimilarity.rank(reference, await self.repository.list_shows(), limit)
        return [item.show for item in ranked]


recommendation_service = RecommendationService(show_repository)
