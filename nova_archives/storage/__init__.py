"""File-based JSON storage.

Data layout:
  data/
    volumes/             Catalog, one <volume_id>.json per volume (chapters inline)
    config.json          Reader settings (playback timings, speaker table,
                         default language, spoiler phases)
    read-registry.json   Ids of chapters the reader has opened
    spoiler-acks.json    Ids of spoiler phases the reader has acknowledged

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates: playback is merged key-by-key,
speakers and spoiler_phases are replaced wholesale.

Registries are passed into call sites (has / set / all), never read globally
by the script engine.
"""

# Re-export all public symbols so `from nova_archives import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    volumes_dir,
)

from .catalog import (  # noqa: F401
    chapter_locked,
    chapter_text,
    chapter_translation,
    clamp_chapter_index,
    delete_volume,
    find_chapter_index,
    get_chapter,
    get_volume,
    list_volumes,
    next_chapter_index,
    prev_chapter_index,
    resolve_jump,
    save_volume,
    volume_unlocked,
)

from .registry import (  # noqa: F401
    JsonKeyRegistry,
    KeyRegistry,
    MemoryKeyRegistry,
    acknowledge_spoiler,
    has_read,
    mark_as_read,
    needs_spoiler_warning,
    read_registry,
    spoiler_registry,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)
