"""
Central error handler.

Classifies, logs, aggregates and presents filesystem failures. This is the
only entry point the rest of an application needs for error reporting.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from filesystem_guard.errors.aggregator import (
    AggregationEntry,
    ErrorAggregator,
)
from filesystem_guard.errors.classifier import categorize_error
from filesystem_guard.errors.messages import (
    get_recovery_suggestions,
    get_user_friendly_message,
)
from filesystem_guard.errors.presenter import Presentation, Presenter
from filesystem_guard.errors.types import FilesystemError, format_traceback

logger = logging.getLogger(__name__)


def format_log_record(error: FilesystemError, timestamp: datetime) -> list[str]:
    """
    Build the structured log lines for an error.

    Args:
        error: Classified error
        timestamp: Time of the failure

    Returns:
        Log lines: header, then optional context, stack and original error
    """
    category = error.category.value if error.category else "unknown"
    lines = [f"[{timestamp.isoformat()}] [{category.upper()}] {error.message}"]

    if error.context:
        lines.append(f"Context: {json.dumps(error.context, default=str, sort_keys=True)}")

    if error.stack:
        lines.append(f"Stack trace:\n{error.stack}")

    original = error.original_error
    if original is not None:
        lines.append(f"Original error: {original}")
        original_stack = getattr(original, "stack", None) or format_traceback(original)
        if original_stack:
            lines.append(f"Original stack:\n{original_stack}")

    return lines


class ErrorHandler:
    """
    Categorizes, logs and displays filesystem errors.

    Repeats of the same error within the aggregation window are logged but
    not shown again; once the window has passed, the next repeat produces a
    single "(occurred N times)" summary.

    Usage:
        handler = ErrorHandler(RichPresenter())
        try:
            validator.enforce(path)
        except PathSecurityError as e:
            handler.handle_error(e)
    """

    def __init__(
        self,
        presenter: Presenter,
        aggregator: Optional[ErrorAggregator] = None,
    ):
        """
        Initialize the handler.

        Args:
            presenter: Destination for user-visible notifications
            aggregator: Aggregator to use (default: 5 second window)
        """
        self.presenter = presenter
        self.aggregator = aggregator or ErrorAggregator()

    def handle_error(
        self, error: FilesystemError, now: Optional[datetime] = None
    ) -> list[Presentation]:
        """
        Handle an error.

        Args:
            error: The failure; classified here if it has no category
            now: Time of the failure (default: current UTC time)

        Returns:
            Presentations emitted for this error (zero, one or two)
        """
        now = now or datetime.now(timezone.utc)
        if error.category is None:
            error.category = categorize_error(error)

        self._log_error(error, now)

        outcome = self.aggregator.record(error, now)
        emitted: list[Presentation] = []

        if outcome.flushed is not None:
            emitted.append(self._summarize(outcome.flushed))

        if not outcome.suppressed:
            emitted.append(
                Presentation(
                    category=error.category,
                    message=get_user_friendly_message(error),
                    suggestions=tuple(get_recovery_suggestions(error)),
                )
            )

        for presentation in emitted:
            self.presenter.present(presentation)
        return emitted

    def handle_exception(
        self,
        exc: BaseException,
        context: Optional[dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> list[Presentation]:
        """Wrap an arbitrary exception and handle it."""
        return self.handle_error(FilesystemError.from_exception(exc, context=context), now)

    def flush(
        self, now: Optional[datetime] = None, *, force: bool = False
    ) -> list[Presentation]:
        """Present summaries for aggregates whose window has elapsed."""
        emitted = [self._summarize(entry) for entry in self.aggregator.flush(now, force=force)]
        for presentation in emitted:
            self.presenter.present(presentation)
        return emitted

    def dispose(self) -> None:
        """Release aggregation state without presenting pending summaries."""
        self.aggregator.dispose()

    def _summarize(self, entry: AggregationEntry) -> Presentation:
        error = entry.representative_error
        return Presentation(
            category=error.category,
            message=f"{get_user_friendly_message(error)} (occurred {entry.count} times)",
            count=entry.count,
        )

    def _log_error(self, error: FilesystemError, timestamp: datetime) -> None:
        for line in format_log_record(error, timestamp):
            logger.error(line)
