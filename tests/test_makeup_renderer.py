"""Renderer readiness gating and Banuba message conversion."""

from logic.fallback_table import fallback_record
from models.filters import FilterAttributes
from tools.makeup_renderer import (
    BanubaBridgeRenderer,
    ReadinessSignal,
    RecordingRenderer,
    to_banuba_filter,
)


def test_readiness_callbacks_run_once_and_late_subscribers_run_immediately() -> None:
    signal = ReadinessSignal()
    calls = []
    signal.on_ready(lambda: calls.append("early"))
    assert calls == []

    signal.set()
    signal.set()
    assert calls == ["early"]
    assert signal.is_ready
    assert signal.wait(0)

    signal.on_ready(lambda: calls.append("late"))
    assert calls == ["early", "late"]


def test_banuba_renderer_queues_until_ready_message() -> None:
    sent = []
    renderer = BanubaBridgeRenderer(sent.append)

    renderer.apply_record(fallback_record("wedding"))
    assert sent == []
    assert renderer.pending_count == 1

    renderer.handle_message({"source": "SOMEONE_ELSE", "type": "READY"})
    assert sent == []

    renderer.handle_message({"source": "BEAUTY_WEB", "type": "READY"})
    assert renderer.pending_count == 0
    assert len(sent) == 1
    message = sent[0]
    assert message["type"] == "APPLY_AI_MAKEUP"
    assert message["source"] == "AI_STYLER"
    assert [item["property"] for item in message["banubaFilters"]] == ["Lips", "Eyes", "Blush", "Highlighter"]

    renderer.apply_filter("lipstick", FilterAttributes("#D40000", 0.9))
    assert len(sent) == 2


def test_banuba_conversion() -> None:
    converted = to_banuba_filter("lipstick", FilterAttributes("#D2527F", 0.8, finish="matte"))

    assert converted["property"] == "Lips"
    assert converted["color"] == {"r": 210, "g": 82, "b": 127}
    assert converted["hex"] == "#D2527F"
    assert converted["alpha"] == 0.8
    assert converted["opacity"] == 0.8
    assert converted["finish"] == "matte"
    assert converted["style"] == "natural"

    assert to_banuba_filter("glitter", FilterAttributes("#FFFFFF", 0.5)) is None
    assert to_banuba_filter("blush", FilterAttributes("#FFFFFF", 0.0))["alpha"] == 0.7


def test_recording_renderer_applies_every_kind() -> None:
    renderer = RecordingRenderer()
    renderer.apply_record(fallback_record("party"))

    assert renderer.readiness.is_ready
    assert renderer.applied_kinds() == ["lipstick", "eyeshadow", "blush", "highlighter"]
