"""Tests for the document and staged surfaces."""

from nova_archives.playback import PlaybackMachine
from nova_archives.script import Narration, SpeakerTable, parse_chapter, parse_script
from nova_archives.surfaces import render_document, staged_view


def _texts(runs):
    return "".join(r["text"] for r in runs)


# ── Document surface ───────────────────────────────────────


def test_paragraph_styles():
    blocks = render_document(parse_chapter("零点：走吧。\n\n雨一直在下。"))
    assert blocks[0]["type"] == "paragraph"
    assert blocks[0]["node"] == "dialogue"
    assert blocks[0]["speaker"] == "point"
    assert blocks[0]["style"] == "point"
    assert blocks[1]["style"] == "narration"
    assert blocks[1]["speaker"] is None


def test_chapter_override_style():
    blocks = render_document(parse_chapter("零点：走吧。"), chapter_id="special-legacy-dusk")
    assert blocks[0]["style"] == "legacy"
    assert blocks[0]["speaker"] == "point"


def test_runs_rendered():
    blocks = render_document(parse_script("before[[DANGER::危险]]after"))
    assert blocks[0]["runs"] == [
        {"style": "plain", "kind": "plain", "text": "before"},
        {"style": "danger", "kind": "emphasis", "text": "危险"},
        {"style": "plain", "kind": "plain", "text": "after"},
    ]


def test_void_vision_lifted_into_reveal():
    blocks = render_document(parse_chapter("白栖：我记得。[[VOID_VISION::她等过。]]然后呢？"))
    assert [b["type"] for b in blocks] == ["paragraph", "reveal", "paragraph"]
    assert _texts(blocks[0]["runs"]) == "白栖：我记得。"
    assert blocks[1]["content"] == "她等过。"
    assert _texts(blocks[2]["runs"]) == "然后呢？"
    assert blocks[2]["style"] == "byaki"


def test_void_vision_only():
    blocks = render_document(parse_script("[[VOID_VISION::x]]"))
    assert blocks == [{"type": "reveal", "content": "x"}]


def test_comms_image_divider_jump():
    text = "零点（通信频道）：[[GREEN::OK]]\n[[IMAGE::a.png::cap]]\n[[DIVIDER]]\n[[JUMP::vol-pb::go]]"
    blocks = render_document(parse_chapter(text))
    assert blocks[0]["type"] == "comms"
    assert blocks[0]["speaker"] == "零点"
    assert blocks[0]["runs"] == [{"style": "green", "kind": "emphasis", "text": "OK"}]
    assert blocks[1] == {"type": "image", "src": "a.png", "caption": "cap"}
    assert blocks[2] == {"type": "divider"}
    assert blocks[3] == {"type": "jump", "target_volume_id": "vol-pb", "label": "go"}


def test_intercept_block():
    text = "0600.0Void>>检测到[[VOID::异常]]\n\n>> 不要看\n【插入结束】"
    block = render_document(parse_script(text))[0]
    assert block["type"] == "intercept"
    assert block["intercept_id"] == "0600.0"
    assert len(block["lines"]) == 4
    assert _texts(block["lines"][0]) == "检测到异常"
    assert block["lines"][1] == []
    assert _texts(block["lines"][2]) == ">> 不要看"
    assert block["lines"][3] == []


def test_intercept_default_id():
    block = render_document(parse_script("0000.2Void>>x【插入结束】"))[0]
    assert block["intercept_id"] == "0000.2"


def test_table_attributes_plain_nodes():
    table = SpeakerTable.from_config([{"key": "kai", "names": ["Kai"]}])
    blocks = render_document([Narration(raw_text="Kai: hi")], table=table)
    assert blocks[0]["speaker"] == "kai"


# ── Staged surface ─────────────────────────────────────────


def test_staged_frame_while_revealing(clock):
    m = PlaybackMachine(parse_chapter("芷漓（低声）：“你听到了吗？”\n\nnext"), clock)
    clock.advance(60)
    frame = staged_view(m, "story-1")
    assert frame["node_type"] == "dialogue"
    assert frame["speaker"] == {
        "key": "zeri", "name": "芷漓", "identity": "zeri", "initials": "ZL", "theme": "zeri",
    }
    assert frame["emotion"] == "低声"
    assert frame["text"] == "你听"
    assert frame["runs"] is None
    assert frame["is_revealing"]
    assert frame["cursor"] == 0
    assert frame["total"] == 2
    assert frame["backlog"] == []


def test_staged_frame_complete_and_backlog(clock):
    m = PlaybackMachine(parse_chapter("零点：走吧。\n\n[[IMAGE::a.png::雨]]"), clock)
    m.advance()
    frame = staged_view(m)
    assert frame["runs"] == [{"style": "plain", "kind": "plain", "text": "走吧。"}]
    m.advance()
    frame = staged_view(m, "PB-01")
    assert frame["node_type"] == "image"
    assert frame["speaker"] is None
    assert frame["image"] == {"src": "a.png", "caption": "雨"}
    assert frame["theme"] == "bw"
    assert frame["backlog"] == ["走吧。"]


def test_staged_bw_theme_speaker(clock):
    m = PlaybackMachine(parse_chapter("零点：走吧。"), clock)
    frame = staged_view(m, "PB-01")
    assert frame["speaker"]["theme"] == "bw"
    assert frame["speaker"]["initials"] == "PO"


def test_staged_placeholder(clock):
    frame = staged_view(PlaybackMachine([], clock))
    assert frame["node_type"] == "system"
    assert frame["speaker"]["identity"] == "system"
    assert frame["speaker"]["initials"] == "SYS"
    assert frame["total"] == 1
