"""Health check and settings endpoints."""

from fastapi import APIRouter

from nova_archives import storage

from .models import UpdateSettings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get reader settings (playback timings, speaker table, language, spoiler phases)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: UpdateSettings):
    """Update reader settings (partial merge; speakers replace the whole table)."""
    return storage.update_config(body.model_dump(exclude_none=True))
