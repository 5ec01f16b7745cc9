"""
Error classification, aggregation and presentation.

Turns raw failures into a stable category, a safe user-facing message
with recovery suggestions, and a bounded stream of notifications.
"""

from filesystem_guard.errors.aggregator import (
    AggregationEntry,
    AggregationOutcome,
    AggregationState,
    ErrorAggregator,
)
from filesystem_guard.errors.classifier import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    categorize_error,
    classify,
)
from filesystem_guard.errors.handler import ErrorHandler, format_log_record
from filesystem_guard.errors.messages import (
    get_recovery_suggestions,
    get_security_message,
    get_user_friendly_message,
)
from filesystem_guard.errors.presenter import (
    CollectingPresenter,
    Presentation,
    Presenter,
    RichPresenter,
)
from filesystem_guard.errors.types import (
    ErrorCategory,
    FilesystemError,
    GuardConfigurationError,
    PathSecurityError,
    WorkspaceNotResolvedError,
)

__all__ = [
    # Types
    "ErrorCategory",
    "FilesystemError",
    "GuardConfigurationError",
    "PathSecurityError",
    "WorkspaceNotResolvedError",
    # Classification
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "categorize_error",
    "classify",
    # Messages
    "get_recovery_suggestions",
    "get_security_message",
    "get_user_friendly_message",
    # Aggregation
    "AggregationEntry",
    "AggregationOutcome",
    "AggregationState",
    "ErrorAggregator",
    # Presentation
    "CollectingPresenter",
    "Presentation",
    "Presenter",
    "RichPresenter",
    "ErrorHandler",
    "format_log_record",
]
