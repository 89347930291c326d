from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[Any, bool], None]


def _serialize(payload: Any) -> str:
    if hasattr(payload, "as_dict"):
        payload = payload.as_dict()
    return json.dumps(payload, sort_keys=True, default=str)


class DataMonitor:
    """Tracks successive polling results and reports whether the data changed.

    Purely observational; the ingestion functions never read from it.
    """

    def __init__(self) -> None:
        self._last: Optional[str] = None
        self._update_count = 0
        self._last_update: Optional[datetime] = None
        self._listeners: List[Listener] = []

    def track_update(self, payload: Any) -> bool:
        serialized = _serialize(payload)
        is_change = self._last is not None and self._last != serialized
        if is_change:
            self._update_count += 1
            logger.info("Data update #%d detected", self._update_count)
        elif self._last is None:
            logger.info("Initial data loaded")
        else:
            logger.debug("Data poll: no changes")

        self._last = serialized
        self._last_update = datetime.now()
        for listener in self._listeners:
            listener(payload, is_change)
        return is_change

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    @property
    def update_count(self) -> int:
        return self._update_count

    @property
    def last_update(self) -> Optional[datetime]:
        return self._last_update
