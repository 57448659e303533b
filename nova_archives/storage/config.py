"""Global reader configuration (playback timings, speaker table, language, spoiler phases)."""

import json
from pathlib import Path
from typing import Any

from nova_archives.script.speakers import DEFAULT_SPEAKERS

from .core import data_dir

_CONFIG_DEFAULTS: dict[str, Any] = {
    "playback": {
        "typewriter_interval_ms": 30,
        "auto_base_delay_ms": 1500,
        "auto_rich_base_delay_ms": 2000,
        "auto_per_char_ms": 20,
    },
    "speakers": DEFAULT_SPEAKERS,
    "default_language": "zh-CN",
    "spoiler_phases": ["phase-2"],
}


def _config_path() -> Path:
    return data_dir() / "config.json"


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config: dict[str, Any] = json.loads(json.dumps(_CONFIG_DEFAULTS))
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        if isinstance(stored.get("playback"), dict):
            config["playback"].update(stored["playback"])
        if "speakers" in stored:
            config["speakers"] = stored["speakers"]
        if "default_language" in stored:
            config["default_language"] = stored["default_language"]
        if "spoiler_phases" in stored:
            config["spoiler_phases"] = stored["spoiler_phases"]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    playback is merged key-by-key; speakers and spoiler_phases are replaced
    wholesale (speaker order is priority order).
    """
    config = get_config()
    if isinstance(fields.get("playback"), dict):
        config["playback"].update(fields["playback"])
    if "speakers" in fields:
        config["speakers"] = fields["speakers"]
    if "default_language" in fields:
        config["default_language"] = fields["default_language"]
    if "spoiler_phases" in fields:
        config["spoiler_phases"] = fields["spoiler_phases"]
    _config_path().write_text(json.dumps(config, indent=2, ensure_ascii=False))
    return config
