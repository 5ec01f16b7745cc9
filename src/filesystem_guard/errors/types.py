"""
Error types for filesystem guard failures.

Every failure that reaches the error handler is a FilesystemError carrying
a category, a message and optional structured context.
"""

import errno
import traceback
from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """Categories of failure, each handled and presented differently."""

    USER = "user"
    """Caller-correctable: bad path, missing file, permission."""

    SYSTEM = "system"
    """Environment or unexpected internal fault. The default bucket."""

    NETWORK = "network"
    """Communication with the external filesystem server failed."""

    SECURITY = "security"
    """Policy boundary violation. Always surfaced."""

    CONFIGURATION = "configuration"
    """Malformed or invalid settings."""


class FilesystemError(Exception):
    """
    A failure of a filesystem operation, optionally classified.

    The category may be left unset; the error handler classifies the
    error from its message before presenting it.
    """

    default_category: Optional[ErrorCategory] = None

    def __init__(
        self,
        message: str,
        *,
        category: Optional[ErrorCategory] = None,
        context: Optional[dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
        stack: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or {}
        self.original_error = original_error
        self._stack = stack

    @property
    def stack(self) -> Optional[str]:
        """Explicit trace text, or the rendered traceback if raised."""
        if self._stack is not None:
            return self._stack
        return format_traceback(self)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        context: Optional[dict[str, Any]] = None,
    ) -> "FilesystemError":
        """
        Wrap an arbitrary exception.

        OSError messages are prefixed with the symbolic errno name
        (ENOENT, EACCES, ...) so classification sees the same codes on
        every platform.
        """
        if isinstance(exc, FilesystemError):
            if context:
                exc.context = {**exc.context, **context}
            return exc

        message = str(exc) or type(exc).__name__
        if isinstance(exc, OSError) and exc.errno in errno.errorcode:
            code = errno.errorcode[exc.errno]
            if code not in message:
                message = f"{code}: {message}"

        return cls(message, context=context, original_error=exc)

    def __repr__(self) -> str:
        category = self.category.value if self.category else None
        return f"{type(self).__name__}(category={category}, message={self.message!r})"


class PathSecurityError(FilesystemError):
    """Raised when a path is denied by the security policy."""

    default_category = ErrorCategory.SECURITY

    def __init__(
        self,
        path: str,
        reason: str,
        *,
        boundary: Optional[str] = None,
        pattern: Optional[str] = None,
        blocked_path: Optional[str] = None,
    ):
        self.path = path
        self.reason = reason
        self.boundary = boundary
        self.pattern = pattern
        self.blocked_path = blocked_path

        context: dict[str, Any] = {"path": path}
        if boundary is not None:
            context["boundary"] = boundary
        if pattern is not None:
            context["pattern"] = pattern
        if blocked_path is not None:
            context["blocked_path"] = blocked_path
        super().__init__(f"{reason} ({path})", context=context)


class GuardConfigurationError(FilesystemError):
    """Raised when guard settings are missing or invalid."""

    default_category = ErrorCategory.CONFIGURATION


class WorkspaceNotResolvedError(GuardConfigurationError):
    """Raised when the workspace root still holds an unresolved placeholder."""

    def __init__(self, workspace_root: str):
        self.workspace_root = workspace_root
        super().__init__(
            f"Workspace root configuration is unresolved: {workspace_root}",
            context={"workspace_root": workspace_root},
        )


def format_traceback(exc: BaseException) -> Optional[str]:
    if exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
