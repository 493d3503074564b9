from fastapi import APIRouter

from tvtantrum.core.version import __version__
from tvtantrum.services.sensory import unrecognized_reporter
from tvtantrum.services.storage import show_catalog

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness probe")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/metrics", summary="Runtime metrics (lightweight)")
async def metrics() -> dict:
    return {
        "catalog_size": len(show_catalog),
        "unrecognized_sensory_values": unrecognized_reporter.total(),
    }
