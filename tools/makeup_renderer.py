"""AR renderer adapters that paint a :class:`FilterRecord` on screen."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from models.filters import FilterAttributes, FilterRecord, hex_to_rgb

LOGGER = logging.getLogger(__name__)

BANUBA_PROPERTIES: Dict[str, str] = {
    "lipstick": "Lips",
    "eyeshadow": "Eyes",
    "eyeliner": "Eyeliner",
    "blush": "Blush",
    "highlighter": "Highlighter",
    "foundation": "Foundation",
    "contour": "Contour",
}
DEFAULT_ALPHA = 0.7


class ReadinessSignal:
    """One-shot readiness event with subscriber callbacks.

    Callbacks registered before :meth:`set` run once when it fires; callbacks
    registered afterwards run immediately. Setting twice is a no-op.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def is_ready(self) -> bool:
        return self._event.is_set()

    def on_ready(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def set(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)


class MakeupRenderer(ABC):
    """Narrow interface the pipeline needs from an AR surface."""

    def __init__(self, readiness: ReadinessSignal | None = None) -> None:
        self.readiness = readiness or ReadinessSignal()

    @abstractmethod
    def apply_filter(self, kind: str, attributes: FilterAttributes) -> None:
        """Paint one feature."""

    def apply_record(self, record: FilterRecord) -> None:
        for kind, attributes in record.items():
            self.apply_filter(kind, attributes)


def to_banuba_filter(kind: str, attributes: FilterAttributes) -> Optional[Dict[str, Any]]:
    """Convert one feature into the Banuba prefab payload, or None if unsupported."""

    prop = BANUBA_PROPERTIES.get(kind)
    if prop is None:
        return None
    r, g, b = hex_to_rgb(attributes.color_hex)
    alpha = attributes.intensity if attributes.intensity > 0 else DEFAULT_ALPHA
    return {
        "type": kind,
        "property": prop,
        "color": {"r": r, "g": g, "b": b},
        "hex": attributes.color_hex,
        "opacity": alpha,
        "alpha": alpha,
        "finish": attributes.finish or "natural",
        "style": attributes.style or "natural",
    }


class BanubaBridgeRenderer(MakeupRenderer):
    """Posts Banuba filter messages through ``transport`` once the SDK is ready.

    Messages applied before readiness are queued and flushed in order when the
    SDK reports ``READY`` (see :meth:`handle_message`).
    """

    def __init__(
        self,
        transport: Callable[[Dict[str, Any]], None],
        readiness: ReadinessSignal | None = None,
    ) -> None:
        super().__init__(readiness)
        self.transport = transport
        self._pending: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        self.readiness.on_ready(self._flush)

    def _message(self, filters: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {"type": "APPLY_AI_MAKEUP", "source": "AI_STYLER", "banubaFilters": filters}

    def _send(self, message: Dict[str, Any]) -> None:
        with self._lock:
            if not self.readiness.is_ready:
                self._pending.append(message)
                return
        self.transport(message)

    def _flush(self) -> None:
        with self._lock:
            pending, self._pending = self._pending, []
        for message in pending:
            self.transport(message)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def apply_filter(self, kind: str, attributes: FilterAttributes) -> None:
        converted = to_banuba_filter(kind, attributes)
        if converted is None:
            LOGGER.warning("Unsupported filter kind for Banuba", extra={"reason": "unsupported_kind", "kind": kind})
            return
        self._send(self._message([converted]))

    def apply_record(self, record: FilterRecord) -> None:
        filters: List[Dict[str, Any]] = []
        for kind, attributes in record.items():
            converted = to_banuba_filter(kind, attributes)
            if converted is not None:
                filters.append(converted)
        self._send(self._message(filters))

    def handle_message(self, message: Dict[str, Any]) -> None:
        """Consume a status message posted back by the SDK page."""

        if message.get("source") != "BEAUTY_WEB":
            return
        message_type = message.get("type")
        if message_type == "READY":
            LOGGER.info("Beauty surface ready")
            self.readiness.set()
        elif message_type == "MAKEUP_APPLIED":
            LOGGER.info("Makeup applied by beauty surface")
        elif message_type == "ERROR":
            LOGGER.warning("Beauty surface reported an error", extra={"reason": "renderer_error", "detail": message.get("error")})
        else:
            LOGGER.debug("Ignoring beauty surface message", extra={"message_type": message_type})


class RecordingRenderer(MakeupRenderer):
    """In-memory renderer that records applied filters."""

    def __init__(self, readiness: ReadinessSignal | None = None, ready: bool = True) -> None:
        super().__init__(readiness)
        self.applied: List[Tuple[str, FilterAttributes]] = []
        if ready:
            self.readiness.set()

    def apply_filter(self, kind: str, attributes: FilterAttributes) -> None:
        self.applied.append((kind, attributes))

    def applied_kinds(self) -> List[str]:
        return [kind for kind, _ in self.applied]


__all__ = [
    "BANUBA_PROPERTIES",
    "BanubaBridgeRenderer",
    "MakeupRenderer",
    "ReadinessSignal",
    "RecordingRenderer",
    "to_banuba_filter",
]
