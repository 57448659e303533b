"""FastAPI API endpoints under /api.

Endpoint groups: health + settings, volumes (catalog, chapter reading,
read status, spoiler acknowledgements), and playback sessions for the staged
reader (/api/playback/{session_id}/...).
"""

from fastapi import APIRouter

from .playback import router as playback_router
from .settings import router as settings_router
from .volumes import router as volumes_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(volumes_router)
router.include_router(playback_router)
