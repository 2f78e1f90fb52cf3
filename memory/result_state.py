"""Stale-response guard for overlapping requests."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

RECOMMENDATION_CHANNEL = "recommendation"
SEARCH_CHANNEL = "search"


class LatestResultTracker:
    """Keeps only the result of the most recently started request per channel.

    ``begin`` hands out a monotonically increasing generation token. A result
    committed with an older token is discarded, so a slow early request can no
    longer overwrite a faster later one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generations: Dict[str, int] = {}
        self._results: Dict[str, Any] = {}

    def begin(self, channel: str) -> int:
        with self._lock:
            token = self._generations.get(channel, 0) + 1
            self._generations[channel] = token
            return token

    def is_current(self, channel: str, token: int) -> bool:
        with self._lock:
            return self._generations.get(channel, 0) == token

    def commit(self, channel: str, token: int, result: Any) -> bool:
        """Store ``result`` if ``token`` is still the newest; return whether it was kept."""

        with self._lock:
            if self._generations.get(channel, 0) != token:
                return False
            self._results[channel] = result
            return True

    def latest(self, channel: str) -> Optional[Any]:
        with self._lock:
            return self._results.get(channel)


__all__ = ["LatestResultTracker", "RECOMMENDATION_CHANNEL", "SEARCH_CHANNEL"]
