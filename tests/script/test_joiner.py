"""Tests for smart_join and SmartJoinBuffer."""

from nova_archives.script import CommsMessage, Narration, SmartJoinBuffer, smart_join


# ── smart_join ─────────────────────────────────────────────


def test_latin_lines_joined_with_space():
    assert smart_join(["The rain kept falling,", "and the lights went out."]) == (
        "The rain kept falling, and the lights went out."
    )


def test_cjk_lines_concatenated():
    assert smart_join(["雨一直在下，", "城市的灯光熄灭。"]) == "雨一直在下，城市的灯光熄灭。"


def test_mixed_boundary_has_no_space():
    assert smart_join(["Signal", "正常"]) == "Signal正常"
    assert smart_join(["信号", "OK"]) == "信号OK"


def test_fullwidth_punctuation_counts_as_cjk():
    assert smart_join(["Hello：", "world"]) == "Hello：world"


def test_single_and_empty():
    assert smart_join([]) == ""
    assert smart_join(["one"]) == "one"


# ── SmartJoinBuffer ────────────────────────────────────────


def test_buffer_flush_narration():
    buf = SmartJoinBuffer()
    buf.append("line one")
    buf.append("line two")
    assert len(buf) == 2
    node = buf.flush()
    assert node == Narration(raw_text="line one line two")
    assert not buf


def test_empty_flush_returns_none():
    assert SmartJoinBuffer().flush() is None


def test_comms_fullwidth():
    buf = SmartJoinBuffer()
    buf.append("零点（通信频道）：一切正常。")
    assert buf.flush() == CommsMessage(speaker_display_name="零点", raw_text="一切正常。")


def test_comms_ascii_variants():
    buf = SmartJoinBuffer()
    buf.append("Zelo (Comms Channel): all clear")
    node = buf.flush()
    assert node == CommsMessage(speaker_display_name="Zelo", raw_text="all clear")


def test_comms_traditional():
    buf = SmartJoinBuffer()
    buf.append("澤洛（通信頻道）:收到")
    assert buf.flush() == CommsMessage(speaker_display_name="澤洛", raw_text="收到")


def test_comms_spans_joined_lines():
    buf = SmartJoinBuffer()
    buf.append("Zeri(Comms Channel): first part")
    buf.append("second part")
    node = buf.flush()
    assert isinstance(node, CommsMessage)
    assert node.raw_text == "first part second part"
