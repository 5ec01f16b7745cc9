"""
Platform detection.

Detects the host operating system once per process and exposes the
path conventions the rest of the package relies on.
"""

import sys
import tempfile
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class PlatformType(str, Enum):
    """Operating system families with distinct path conventions."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PlatformInfo:
    """
    Immutable description of the host platform.

    Build one with detect_platform() or use the process-wide instance
    returned by get_platform_info().
    """

    type: PlatformType
    path_separator: str
    home_directory: str
    temp_directory: str

    @property
    def is_windows(self) -> bool:
        return self.type == PlatformType.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.type == PlatformType.MACOS

    @property
    def is_linux(self) -> bool:
        return self.type == PlatformType.LINUX

    def __repr__(self) -> str:
        return (
            f"PlatformInfo(type={self.type.value}, "
            f"sep={self.path_separator!r}, home={self.home_directory!r})"
        )


def _platform_type(system: str) -> PlatformType:
    if system in ("win32", "cygwin"):
        return PlatformType.WINDOWS
    if system == "darwin":
        return PlatformType.MACOS
    if system.startswith("linux"):
        return PlatformType.LINUX
    return PlatformType.UNKNOWN


def detect_platform(
    system: Optional[str] = None,
    home: Optional[str] = None,
    temp: Optional[str] = None,
) -> PlatformInfo:
    """
    Detect platform information.

    Args:
        system: Platform identifier in sys.platform form (default: host)
        home: Home directory override (default: current user's home)
        temp: Temp directory override (default: tempfile.gettempdir())

    Returns:
        PlatformInfo for the requested or current platform
    """
    platform_type = _platform_type(system if system is not None else sys.platform)
    return PlatformInfo(
        type=platform_type,
        path_separator="\\" if platform_type == PlatformType.WINDOWS else "/",
        home_directory=home if home is not None else str(Path.home()),
        temp_directory=temp if temp is not None else tempfile.gettempdir(),
    )


_platform_info: Optional[PlatformInfo] = None
_platform_lock = threading.Lock()


def get_platform_info() -> PlatformInfo:
    """Return the process-wide PlatformInfo, detecting it on first use."""
    global _platform_info
    if _platform_info is None:
        with _platform_lock:
            if _platform_info is None:
                _platform_info = detect_platform()
    return _platform_info


def reset_platform_info() -> None:
    """Forget the cached PlatformInfo so the next access re-detects it."""
    global _platform_info
    with _platform_lock:
        _platform_info = None
