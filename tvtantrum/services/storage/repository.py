from loguru import logger

from tvtantrum.core.config import settings
from tvtantrum.models.show import Show
from tvtantrum.services.storage.catalog import ShowCatalog, show_catalog
from tvtantrum.services.storage.favorites import FavoriteStore
from tvtantrum.services.storage.popularity import PopularityTracker


class ShowRepository:
    """
    Storage facade combining the catalog, favorites and popularity stores.

    This is the collaborator the recommender reads from.
    """

    def __init__(
        self,
        catalog: ShowCatalog,
        favorites: FavoriteStore | None = None,
        popularity: PopularityTracker | None = None,
    ):
        self.catalog = catalog
        self.favorites = favorites or FavoriteStore()
        self.popularity = popularity or PopularityTracker()

    async def list_shows(self) -> list[Show]:
        return self.catalog.list_all()

    async def get_show(self, show_id: int) -> Show | None:
        return self.catalog.get(show_id)

    async def get_favorite_shows(self, user_id: str) -> list[Show]:
        """Favorited shows that still exist in the catalog, in ascending id order."""
        ids = await self.favorites.list_ids(user_id)
        shows = self.catalog.get_many(ids)
        if len(shows) != len(ids):
            logger.debug(f"[{user_id}] {len(ids) - len(shows)} favorite(s) no longer in catalog")
        return shows

    async def get_popular_shows(self, limit: int) -> list[Show]:
        """
        Top shows by popularity score.

        Falls back to the calmest shows when nothing has been tracked yet.
        """
        top_ids = await self.popularity.top_show_ids(limit)
        if not top_ids:
            return self.catalog.calmest(limit)
        return [show for show in (self.catalog.get(i) for i in top_ids) if show is not None]

    async def get_catalog_shows_in_stimulation_range(
        self, min_score: int, max_score: int, excluding: set[int] | None = None
    ) -> list[Show]:
        return self.catalog.in_stimulation_range(
            min_score, max_score, excluding=excluding, limit=settings.RECOMMENDATION_CANDIDATE_CAP
        )


show_repository = ShowRepository(show_catalog)
