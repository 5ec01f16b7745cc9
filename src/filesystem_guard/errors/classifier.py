"""
Heuristic classification of raw failures.

Rules are evaluated top to bottom and the first match wins, so the order
of CLASSIFICATION_RULES decides ties (a "blocked connection" is a
security failure, not a network one).
"""

from dataclasses import dataclass
from typing import Optional

from filesystem_guard.errors.types import ErrorCategory


@dataclass(frozen=True)
class ClassificationRule:
    """A category with the lower-case keywords that select it."""

    category: ErrorCategory
    message_keywords: tuple[str, ...]
    name_keywords: tuple[str, ...] = ()

    def matches(self, message: str, name: str) -> bool:
        if any(keyword in message for keyword in self.message_keywords):
            return True
        return any(keyword in name for keyword in self.name_keywords)


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        ErrorCategory.SECURITY,
        ("security", "blocked", "unauthorized", "forbidden", "boundary"),
    ),
    ClassificationRule(
        ErrorCategory.NETWORK,
        ("network", "connection", "timeout", "econnrefused", "enotfound"),
        name_keywords=("network",),
    ),
    ClassificationRule(
        ErrorCategory.CONFIGURATION,
        ("configuration", "config", "setting", "invalid setting"),
    ),
    ClassificationRule(
        ErrorCategory.USER,
        (
            "invalid",
            "not found",
            "does not exist",
            "enoent",
            "permission denied",
            "eacces",
        ),
    ),
)

DEFAULT_CATEGORY = ErrorCategory.SYSTEM


def classify(message: Optional[str], name: Optional[str] = None) -> ErrorCategory:
    """
    Classify a failure by its message and optional error name.

    Matching is a case-insensitive substring search. Never raises;
    anything unrecognized is a SYSTEM error.
    """
    lowered_message = (message or "").lower()
    lowered_name = (name or "").lower()
    for rule in CLASSIFICATION_RULES:
        if rule.matches(lowered_message, lowered_name):
            return rule.category
    return DEFAULT_CATEGORY


def categorize_error(error: BaseException) -> ErrorCategory:
    """Return the error's own category, or classify it from its message."""
    category = getattr(error, "category", None)
    if isinstance(category, ErrorCategory):
        return category
    message = getattr(error, "message", None) or str(error)
    return classify(message, type(error).__name__)
