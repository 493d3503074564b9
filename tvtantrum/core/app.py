from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from tvtantrum.api.main import api_router
from tvtantrum.services.redis_service import redis_service
from tvtantrum.services.storage import show_catalog

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    show_catalog.load(settings.CATALOG_PATH)
    yield
    try:
        await redis_service.close()
    except Exception as exc:
        logger.warning(f"Failed to close Redis client: {exc}")


app = FastAPI(
    title=settings.APP_NAME,
    description="Sensory-level ratings and recommendations for children's TV shows",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
