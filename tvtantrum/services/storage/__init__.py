from tvtantrum.services.storage.catalog import ShowCatalog, ShowNotFoundError, show_catalog
from tvtantrum.services.storage.favorites import FavoriteStore
from tvtantrum.services.storage.popularity import PopularityTracker
from tvtantrum.services.storage.repository import ShowRepository, show_repository

__all__ = [
    "FavoriteStore",
    "PopularityTracker",
    "ShowCatalog",
    "ShowNotFoundError",
    "ShowRepository",
    "show_catalog",
    "show_repository",
]
