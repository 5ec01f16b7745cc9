"""
Platform detection and path conventions.

Provides the single source of truth for OS-specific path handling:
separators, normalization, display formatting and the baseline list of
paths that are always blocked on each platform.
"""

from filesystem_guard.platform.detection import (
    PlatformInfo,
    PlatformType,
    detect_platform,
    get_platform_info,
    reset_platform_info,
)
from filesystem_guard.platform.paths import (
    PlatformPaths,
    format_path_for_display,
    get_basename,
    get_dirname,
    get_extension,
    get_platform_blocked_paths,
    is_absolute_path,
    join_paths,
    normalize_path,
    resolve_path,
    to_backslashes,
    to_forward_slashes,
)

__all__ = [
    "PlatformInfo",
    "PlatformType",
    "PlatformPaths",
    "detect_platform",
    "get_platform_info",
    "reset_platform_info",
    "format_path_for_display",
    "get_basename",
    "get_dirname",
    "get_extension",
    "get_platform_blocked_paths",
    "is_absolute_path",
    "join_paths",
    "normalize_path",
    "resolve_path",
    "to_backslashes",
    "to_forward_slashes",
]
