"""Chapter presentation themes and speaker theme keys.

Theme detection is a pure lookup on the chapter id (first rule wins):
  PB* or *PB-*                              → bw (black & white; overrides speakers)
  story-variable-* / *byaki* / *void*       → variable
  story-frag-rain-*                         → rain
  story-coffee* / story-hotpot* / *daily*   → daily
  story-collab-star*                        → collab-star
  anything else                             → default
"""

from nova_archives.script.speakers import IDENTITIES, identity_for

THEMES = ("variable", "rain", "daily", "bw", "collab-star", "default")

# Chapters whose paragraphs ignore speaker styling in the document surface.
PARAGRAPH_OVERRIDES = {
    "special-legacy-dusk": "legacy",
    "story-byaki-diary": "diary",
}


def detect_chapter_theme(chapter_id: str) -> str:
    if chapter_id.startswith("PB") or "PB-" in chapter_id:
        return "bw"
    if chapter_id.startswith("story-variable-") or "byaki" in chapter_id or "void" in chapter_id:
        return "variable"
    if chapter_id.startswith("story-frag-rain-"):
        return "rain"
    if chapter_id.startswith(("story-coffee", "story-hotpot")) or "daily" in chapter_id:
        return "daily"
    if chapter_id.startswith("story-collab-star"):
        return "collab-star"
    return "default"


def speaker_theme(speaker_key: str, theme: str) -> dict[str, str]:
    """Theme key and initials for a speaker under a chapter theme.

    Unknown speaker keys degrade to the "unknown" identity. In the bw theme
    every speaker shares one style and shows the first two letters of its key.
    """
    identity = identity_for(speaker_key)
    if theme == "bw":
        return {
            "identity": identity,
            "style": "bw",
            "initials": (speaker_key or identity)[:2].upper(),
        }
    style = identity
    if theme == "variable" and identity in ("byaki", "unknown"):
        style = f"variable-{identity}"
    return {"identity": identity, "style": style, "initials": IDENTITIES[identity]}


def paragraph_override(chapter_id: str) -> str | None:
    return PARAGRAPH_OVERRIDES.get(chapter_id)
