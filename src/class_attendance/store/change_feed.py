from __future__ import annotations

import logging
import threading
from collections import defaultdict

from .model import ChangeEvent
from .repository import ChangeCallback, Unsubscribe

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Observer Pattern: per-table subscribers notified after a committed write.

    Delivery is synchronous and best-effort: a failing subscriber is logged and
    does not affect the writer or the other subscribers.
    """

    def __init__(self):
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, table: str, callback: ChangeCallback) -> Unsubscribe:
        with self._lock:
            self._subscribers[table].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(table, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(event.table, []))

        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                logger.exception("Change subscriber failed for table %s", event.table)
