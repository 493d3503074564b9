from fastapi import APIRouter

from .endpoints.health import router as health_router
from .endpoints.sensory import router as sensory_router
from .endpoints.shows import router as shows_router
from .endpoints.users import router as users_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "TV Tantrum API is running"}


api_router.include_router(health_router)

v1_router = APIRouter(prefix="/api")
v1_router.include_router(shows_router)
v1_router.include_router(users_router)
v1_router.include_router(sensory_router)

api_router.include_router(v1_router)
