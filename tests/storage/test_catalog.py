"""Tests for the volume catalog and chapter navigation."""

from nova_archives import storage
from nova_archives.storage import MemoryKeyRegistry


def _volume(**extra):
    volume = {
        "id": "vol-main",
        "title": "Main",
        "chapters": [
            {"id": "c1", "translations": {"zh-CN": {"title": "一", "content": "零点：开始。"}, "en": {"title": "One", "content": "Point: begin."}}},
            {"id": "c2", "translations": {"zh-CN": {"title": "二", "content": "雨。"}}},
            {"id": "c3", "status": "locked", "translations": {"ja": {"title": "三", "content": "雨"}}},
        ],
    }
    volume.update(extra)
    return volume


def test_save_and_get_volume():
    storage.save_volume(_volume())
    volume = storage.get_volume("vol-main")
    assert volume["title"] == "Main"
    assert len(volume["chapters"]) == 3
    assert "requires_read" not in volume


def test_get_missing_or_bad_id():
    assert storage.get_volume("nope") is None
    assert storage.get_volume("") is None
    assert storage.get_volume("../config") is None


def test_list_volumes_sorted():
    storage.save_volume({"id": "b", "title": "B"})
    storage.save_volume({"id": "a", "title": "A"})
    assert [v["id"] for v in storage.list_volumes()] == ["a", "b"]


def test_delete_volume():
    storage.save_volume({"id": "a"})
    assert storage.delete_volume("a")
    assert not storage.delete_volume("a")


def test_get_chapter_out_of_range():
    storage.save_volume(_volume())
    assert storage.get_chapter("vol-main", 0)["id"] == "c1"
    assert storage.get_chapter("vol-main", 3) is None
    assert storage.get_chapter("vol-main", -1) is None
    assert storage.get_chapter("missing", 0) is None


def test_chapter_text_language_fallback():
    chapters = _volume()["chapters"]
    assert storage.chapter_text(chapters[0], "en") == "Point: begin."
    assert storage.chapter_text(chapters[1], "en") == "雨。"
    assert storage.chapter_text(chapters[2], "en") == "雨"
    assert storage.chapter_text({"id": "x"}, "en") == ""


def test_navigation_bounds():
    volume = _volume()
    assert storage.clamp_chapter_index(volume, 10) == 2
    assert storage.clamp_chapter_index(volume, -4) == 0
    assert storage.clamp_chapter_index({"chapters": []}, 3) == 0
    assert storage.next_chapter_index(volume, 0) == 1
    assert storage.next_chapter_index(volume, 2) is None
    assert storage.prev_chapter_index(volume, 1) == 0
    assert storage.prev_chapter_index(volume, 0) is None


def test_chapter_locked():
    assert storage.chapter_locked({"id": "c", "status": "locked"})
    assert storage.chapter_locked({"id": "c", "status": "corrupted"})
    assert not storage.chapter_locked({"id": "c", "status": "published"})
    assert not storage.chapter_locked({"id": "c"})
    assert not storage.chapter_locked({"id": "F_ERR", "status": "locked"})


def test_navigation_skips_locked_chapters():
    volume = _volume()
    volume["chapters"].append({"id": "c4", "translations": {}})
    volume["chapters"].insert(0, {"id": "c0", "status": "corrupted", "translations": {}})
    # c0 corrupted, c1, c2, c3 locked, c4
    assert storage.next_chapter_index(volume, 2) == 4
    assert storage.prev_chapter_index(volume, 4) == 2
    assert storage.prev_chapter_index(volume, 1) is None
    assert storage.next_chapter_index(_volume(), 1) is None


def test_find_chapter_index():
    assert storage.find_chapter_index(_volume(), "c2") == 1
    assert storage.find_chapter_index(_volume(), "zz") is None


def test_resolve_jump():
    storage.save_volume(_volume())
    assert storage.resolve_jump("vol-main")["id"] == "vol-main"
    assert storage.resolve_jump("vol-pb") is None


def test_volume_prerequisite():
    volume = _volume(requires_read="c1")
    storage.save_volume(volume)
    assert storage.get_volume("vol-main")["requires_read"] == "c1"
    reg = MemoryKeyRegistry()
    assert not storage.volume_unlocked(volume, reg)
    reg.set("c1")
    assert storage.volume_unlocked(volume, reg)
    assert storage.volume_unlocked(_volume(), MemoryKeyRegistry())
