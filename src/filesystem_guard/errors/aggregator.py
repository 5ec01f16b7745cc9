"""
Time-windowed aggregation of repeated errors.

Each distinct "<category>:<message>" key is a small state machine:

    ABSENT --first occurrence--> ACTIVE        (error is shown)
    ACTIVE --repeat within window--> ACTIVE    (suppressed, count += 1)
    ACTIVE --repeat after window--> ACTIVE     (pending summary flushed if
                                                count > 1, then restarted)

There is no background timer. A pending summary is only flushed when a
matching error arrives after the window, or when the caller asks for it
with flush(). dispose() drops pending summaries.

The current time is an explicit input to record() and flush(), so tests
can simulate time without sleeping.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from filesystem_guard.errors.types import FilesystemError

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 5.0
DEFAULT_MAX_ENTRIES = 1000


class AggregationState(str, Enum):
    """State of a single aggregation key."""

    ABSENT = "absent"
    ACTIVE = "active"


@dataclass
class AggregationEntry:
    """Occurrences of one error key within the current window."""

    key: str
    representative_error: FilesystemError
    count: int
    first_occurrence: datetime
    last_occurrence: datetime


@dataclass(frozen=True)
class AggregationOutcome:
    """
    Result of recording one error.

    suppressed is True when the error falls inside an active window and
    must not be shown. flushed carries a completed entry (count > 1) whose
    summary should be shown before anything else.
    """

    suppressed: bool
    flushed: Optional[AggregationEntry] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorAggregator:
    """
    Coalesces floods of identical errors into at most two notifications.

    Usage:
        aggregator = ErrorAggregator(window_seconds=5.0)
        outcome = aggregator.record(error)
        if outcome.flushed:
            show_summary(outcome.flushed)
        if not outcome.suppressed:
            show(error)

    The entry map is guarded by a lock, so one aggregator may be shared
    between threads.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """
        Initialize the aggregator.

        Args:
            window_seconds: Aggregation window measured from the first occurrence
            max_entries: Maximum number of tracked keys; the least recently
                seen key is evicted beyond this
        """
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.window = timedelta(seconds=window_seconds)
        self.max_entries = max_entries
        self._entries: dict[str, AggregationEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def aggregation_key(error: FilesystemError) -> str:
        category = error.category.value if error.category else "unknown"
        return f"{category}:{error.message}"

    def record(
        self, error: FilesystemError, now: Optional[datetime] = None
    ) -> AggregationOutcome:
        """
        Record an occurrence of error at time now.

        Args:
            error: Classified error
            now: Time of the occurrence (default: current UTC time)

        Returns:
            AggregationOutcome telling the caller what to present
        """
        now = now or _utcnow()
        key = self.aggregation_key(error)

        with self._lock:
            flushed: Optional[AggregationEntry] = None
            existing = self._entries.get(key)

            if existing is not None:
                if now - existing.first_occurrence < self.window:
                    existing.count += 1
                    existing.last_occurrence = now
                    existing.representative_error = error
                    logger.debug(f"Suppressed repeat of {key!r} (count={existing.count})")
                    return AggregationOutcome(suppressed=True)

                del self._entries[key]
                if existing.count > 1:
                    flushed = existing

            self._entries[key] = AggregationEntry(
                key=key,
                representative_error=error,
                count=1,
                first_occurrence=now,
                last_occurrence=now,
            )
            self._evict_overflow(keep=key)

        return AggregationOutcome(suppressed=False, flushed=flushed)

    def _evict_overflow(self, keep: str) -> None:
        while len(self._entries) > self.max_entries:
            oldest = min(
                (e for e in self._entries.values() if e.key != keep),
                key=lambda e: e.last_occurrence,
            )
            if oldest.count > 1:
                logger.warning(
                    f"Dropping pending summary for {oldest.key!r} "
                    f"(occurred {oldest.count} times) to stay within {self.max_entries} entries"
                )
            else:
                logger.debug(f"Evicting aggregation entry {oldest.key!r}")
            del self._entries[oldest.key]

    def state(self, key: str) -> AggregationState:
        with self._lock:
            if key in self._entries:
                return AggregationState.ACTIVE
            return AggregationState.ABSENT

    def get_entry(self, key: str) -> Optional[AggregationEntry]:
        with self._lock:
            return self._entries.get(key)

    def pending(self) -> list[AggregationEntry]:
        """Return entries that have suppressed at least one repeat."""
        with self._lock:
            return [entry for entry in self._entries.values() if entry.count > 1]

    def flush(
        self, now: Optional[datetime] = None, *, force: bool = False
    ) -> list[AggregationEntry]:
        """
        Drain entries whose window has elapsed.

        Entries with count > 1 are returned for summarizing; single
        occurrences were already shown and are dropped silently.

        Args:
            now: Reference time (default: current UTC time)
            force: Drain every entry regardless of its window

        Returns:
            Completed entries with count > 1, oldest first
        """
        now = now or _utcnow()
        with self._lock:
            expired = [
                entry
                for entry in self._entries.values()
                if force or now - entry.first_occurrence >= self.window
            ]
            for entry in expired:
                del self._entries[entry.key]

        summaries = [entry for entry in expired if entry.count > 1]
        summaries.sort(key=lambda e: e.first_occurrence)
        return summaries

    def dispose(self) -> None:
        """Clear all entries without reporting pending summaries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
