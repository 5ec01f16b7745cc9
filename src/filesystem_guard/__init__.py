"""
Filesystem Guard - trust boundary and failure reporting for filesystem tools.

This package decides whether an automated client may touch a path under a
configurable, cross-platform security policy, and turns failures into a
stable classification, a safe user-facing explanation and a bounded stream
of notifications.
"""

__version__ = "0.1.0"

from filesystem_guard.platform import (
    PlatformInfo,
    PlatformPaths,
    PlatformType,
    detect_platform,
    get_platform_info,
)

from filesystem_guard.security import (
    PathSecurityValidator,
    SecurityPolicy,
    ValidationResult,
)

from filesystem_guard.errors import (
    CollectingPresenter,
    ErrorAggregator,
    ErrorCategory,
    ErrorHandler,
    FilesystemError,
    PathSecurityError,
    Presentation,
    RichPresenter,
    classify,
)

from filesystem_guard.settings import GuardConfig

__all__ = [
    # Version
    "__version__",
    # Platform
    "PlatformInfo",
    "PlatformPaths",
    "PlatformType",
    "detect_platform",
    "get_platform_info",
    # Security
    "PathSecurityValidator",
    "SecurityPolicy",
    "ValidationResult",
    # Errors
    "CollectingPresenter",
    "ErrorAggregator",
    "ErrorCategory",
    "ErrorHandler",
    "FilesystemError",
    "PathSecurityError",
    "Presentation",
    "RichPresenter",
    "classify",
    # Settings
    "GuardConfig",
]
