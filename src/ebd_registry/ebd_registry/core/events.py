from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .enums import ChangeType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    change: ChangeType
    record_id: Optional[str] = None


Listener = Callable[[ChangeEvent], None]


class ChangeFeed:
    """Table-scoped change notifications.

    Writers publish after a successful write; readers (e.g. the registrations
    stream) subscribe to one table and get a callable that removes them again.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, table: str, callback: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.setdefault(table, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(table, [])
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def publish(self, table: str, change: ChangeType, record_id: Optional[str] = None) -> None:
        event = ChangeEvent(table=table, change=change, record_id=record_id)
        with self._lock:
            listeners = list(self._listeners.get(table, []))

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                # One broken subscriber must not break the write that triggered it.
                log.exception("change listener failed for table=%s", table)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._listeners.get(table, []))
