from __future__ import annotations

import itertools
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.store_attendance_repository import ATTENDANCE_TABLE
from ..common.datetime_utils import now_local
from ..core.constants import ANALYTICS_MAX_AGE_SECONDS, MAX_WATCHED_SELECTIONS
from ..store.model import ChangeEvent
from ..store.repository import RecordStore
from .service import AnalyticsService, ClassAnalytics

logger = logging.getLogger(__name__)

SelectionKey = tuple[str, Optional[str]]


@dataclass
class _Slot:
    ticket: int = 0
    # stale until a refresh with a newer ticket lands
    invalid_after: int = 0
    analytics: Optional[ClassAnalytics] = None
    computed_on: Optional[date] = None
    computed_at: float = 0.0


class LiveAnalytics:
    """Serve analytics of watched (class, subject) selections.

    A cached bundle is reused only while it is for today, younger than
    ``max_age_seconds`` and no attendance insert for the selection has been
    seen since its refresh started. Inserts only mark selections stale; the
    recompute happens on the next read. When refreshes overlap, the one that
    *started* last is kept.

    At most ``max_watched`` selections are kept, least recently read first out.
    """

    def __init__(
        self,
        analytics: AnalyticsService,
        store: RecordStore,
        *,
        clock: Callable[[], datetime] = now_local,
        max_age_seconds: float = ANALYTICS_MAX_AGE_SECONDS,
        max_watched: int = MAX_WATCHED_SELECTIONS,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self._analytics = analytics
        self._clock = clock
        self._max_age = max_age_seconds
        self._max_watched = max(1, max_watched)
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._slots: OrderedDict[SelectionKey, _Slot] = OrderedDict()
        self._tickets = itertools.count(1)
        self._unsubscribe = store.subscribe(ATTENDANCE_TABLE, self._on_change)

    def close(self) -> None:
        self._unsubscribe()

    def watched(self) -> list[SelectionKey]:
        with self._lock:
            return list(self._slots)

    def current(self, class_id: str, subject_name: Optional[str] = None) -> ClassAnalytics:
        """Analytics for a selection, recomputed when the cached one is stale."""

        key = (class_id, subject_name or None)
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                self._slots[key] = _Slot()
                while len(self._slots) > self._max_watched:
                    dropped, _ = self._slots.popitem(last=False)
                    logger.debug("Stopped watching analytics for class=%s subject=%s", *dropped)
            else:
                self._slots.move_to_end(key)
                if self._is_fresh(slot):
                    return slot.analytics
        return self.refresh(*key)

    def refresh(self, class_id: str, subject_name: Optional[str] = None) -> ClassAnalytics:
        key = (class_id, subject_name or None)
        with self._lock:
            ticket = next(self._tickets)
        started = self._monotonic()
        today = self._clock().date()

        result = self._analytics.class_analytics(class_id, subject_name)

        with self._lock:
            slot = self._slots.get(key)
            if slot is not None and ticket > slot.ticket:
                slot.ticket = ticket
                slot.analytics = result
                slot.computed_on = today
                slot.computed_at = started
        return result

    def _is_fresh(self, slot: _Slot) -> bool:
        return (
            slot.analytics is not None
            and slot.ticket > slot.invalid_after
            and slot.computed_on == self._clock().date()
            and self._monotonic() - slot.computed_at < self._max_age
        )

    def _on_change(self, event: ChangeEvent) -> None:
        with self._lock:
            stale = [
                key
                for key in self._slots
                if any(
                    str(row.get("class_id")) == key[0] and (key[1] is None or row.get("subject_name") == key[1])
                    for row in event.rows
                )
            ]
            for key in stale:
                self._slots[key].invalid_after = next(self._tickets)

        if stale:
            logger.debug("Marked %d analytics selection(s) stale after %s", len(stale), event.kind.value)
