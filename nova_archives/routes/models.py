"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, Field


class OpenPlayback(BaseModel):
    volume_id: str
    index: int = 0
    language: str | None = None
    client_id: str = "default"


class SpeakerEntry(BaseModel):
    key: str
    names: list[str]
    markers: list[str] | None = None


class PlaybackTimings(BaseModel):
    typewriter_interval_ms: int | None = Field(None, ge=1)
    auto_base_delay_ms: int | None = Field(None, ge=1)
    auto_rich_base_delay_ms: int | None = Field(None, ge=1)
    auto_per_char_ms: int | None = Field(None, ge=0)


class UpdateSettings(BaseModel):
    playback: PlaybackTimings | None = None
    speakers: list[SpeakerEntry] | None = None
    default_language: str | None = None
    spoiler_phases: list[str] | None = None
