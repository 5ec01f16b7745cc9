"""
Platform-aware path utilities.

All path handling in the package goes through PlatformPaths so that
separator conventions, home expansion and display formatting agree with
each other. Windows rules come from ntpath and everything else from
posixpath, which keeps Windows behavior reproducible on any host.
"""

import ntpath
import os
import posixpath
import re
from typing import Optional

from filesystem_guard.platform.detection import PlatformInfo, get_platform_info

_SEPARATOR_RUN = re.compile(r"[/\\]+")
_DRIVE_LETTER = re.compile(r"^[a-zA-Z]:")

COMMON_BLOCKED_PATHS = (".git", ".env", "node_modules")

WINDOWS_BLOCKED_PATHS = (
    "C:\\Windows",
    "C:\\Program Files",
    "C:\\Program Files (x86)",
    "C:\\ProgramData",
    "C:\\Users\\*\\AppData",
)

MACOS_BLOCKED_PATHS = (
    "/System",
    "/Library",
    "/private",
    "/usr",
    "/bin",
    "/sbin",
    "/etc",
    "~/.ssh",
    "~/Library/Keychains",
)

LINUX_BLOCKED_PATHS = (
    "/sys",
    "/proc",
    "/dev",
    "/boot",
    "/usr",
    "/bin",
    "/sbin",
    "/etc",
    "~/.ssh",
    "~/.gnupg",
)


class PlatformPaths:
    """
    Path operations bound to a specific platform.

    Usage:
        paths = PlatformPaths(get_platform_info())
        paths.normalize("src//lib/../main.py")   # "src/main.py" on POSIX
        paths.format_for_display("/home/alice/project")  # "~/project"
    """

    def __init__(self, info: Optional[PlatformInfo] = None):
        """
        Initialize path utilities.

        Args:
            info: Platform to follow (default: the detected host platform)
        """
        self.info = info or get_platform_info()
        self._pathmod = ntpath if self.info.is_windows else posixpath

    @property
    def separator(self) -> str:
        return self.info.path_separator

    def normalize(self, path: str) -> str:
        """
        Normalize separators and collapse "." and ".." segments.

        Every run of "/" or "\\" becomes a single platform separator. The
        result is stable: normalize(normalize(p)) == normalize(p).
        """
        if not path:
            return "."
        collapsed = _SEPARATOR_RUN.sub(lambda _: self.separator, path)
        return self._pathmod.normpath(collapsed)

    def join(self, *segments: str) -> str:
        """Join segments with the platform separator, skipping empty ones."""
        parts = [segment for segment in segments if segment]
        if not parts:
            return "."
        if len(parts) == 1:
            return parts[0]
        return self.normalize(self.separator.join(parts))

    @staticmethod
    def to_forward_slashes(path: str) -> str:
        return path.replace("\\", "/")

    @staticmethod
    def to_backslashes(path: str) -> str:
        return path.replace("/", "\\")

    def _strip_trailing(self, path: str) -> str:
        separators = "/\\" if self.info.is_windows else "/"
        stripped = path.rstrip(separators)
        return stripped or path[:1]

    def basename(self, path: str) -> str:
        return self._pathmod.basename(self._strip_trailing(path))

    def dirname(self, path: str) -> str:
        return self._pathmod.dirname(self._strip_trailing(path)) or "."

    def extension(self, path: str) -> str:
        """Return the extension including the dot, or "" if there is none."""
        return self._pathmod.splitext(self.basename(path))[1]

    def is_absolute(self, path: str) -> bool:
        return self._pathmod.isabs(path)

    def resolve(self, base: str, relative: str) -> str:
        """
        Resolve a relative path against a base path.

        A relative base is anchored at the current working directory, so
        the result is always absolute.
        """
        combined = self._pathmod.join(base, relative) if relative else base
        if not self.is_absolute(combined):
            combined = self._pathmod.join(os.getcwd(), combined)
        return self.normalize(combined)

    def expand_home(self, path: str) -> str:
        """Replace a leading "~" segment with the home directory."""
        if path == "~":
            return self.info.home_directory
        if path[:1] == "~" and path[1:2] in ("/", "\\"):
            return self.info.home_directory + path[1:]
        return path

    def _upper_drive(self, path: str) -> str:
        if self.info.is_windows and _DRIVE_LETTER.match(path):
            return path[0].upper() + path[1:]
        return path

    def format_for_display(self, path: str) -> str:
        """
        Format a path for display to the user.

        Upper-cases a Windows drive letter and replaces the home directory
        prefix with "~". Applying it twice gives the same result.
        """
        normalized = self._upper_drive(self.normalize(path))
        home = self._upper_drive(self.normalize(self.info.home_directory))
        home = home.rstrip(self.separator)
        if not home:
            return normalized

        candidate, prefix = normalized, home
        if self.info.is_windows:
            candidate, prefix = normalized.casefold(), home.casefold()

        if candidate == prefix:
            return "~"
        if candidate.startswith(prefix + self.separator):
            return "~" + normalized[len(home):]
        return normalized

    def default_blocked_paths(self) -> list[str]:
        """Return the baseline blocked paths for this platform."""
        blocked = list(COMMON_BLOCKED_PATHS)
        if self.info.is_windows:
            blocked.extend(WINDOWS_BLOCKED_PATHS)
        elif self.info.is_macos:
            blocked.extend(MACOS_BLOCKED_PATHS)
        elif self.info.is_linux:
            blocked.extend(LINUX_BLOCKED_PATHS)
        return blocked

    def shell(self) -> str:
        """Return the user's shell for this platform."""
        if self.info.is_windows:
            return os.environ.get("COMSPEC") or "cmd.exe"
        return os.environ.get("SHELL") or "/bin/sh"

    def command_syntax(self, command: str) -> str:
        """Quote (Windows) or escape (POSIX) a command containing spaces."""
        if self.info.is_windows:
            return f'"{command}"' if " " in command else command
        return command.replace(" ", "\\ ")


def _default_paths() -> PlatformPaths:
    return PlatformPaths(get_platform_info())


def normalize_path(path: str) -> str:
    return _default_paths().normalize(path)


def join_paths(*segments: str) -> str:
    return _default_paths().join(*segments)


def to_forward_slashes(path: str) -> str:
    return PlatformPaths.to_forward_slashes(path)


def to_backslashes(path: str) -> str:
    return PlatformPaths.to_backslashes(path)


def get_basename(path: str) -> str:
    return _default_paths().basename(path)


def get_dirname(path: str) -> str:
    return _default_paths().dirname(path)


def get_extension(path: str) -> str:
    return _default_paths().extension(path)


def is_absolute_path(path: str) -> bool:
    return _default_paths().is_absolute(path)


def resolve_path(base: str, relative: str) -> str:
    return _default_paths().resolve(base, relative)


def format_path_for_display(path: str) -> str:
    return _default_paths().format_for_display(path)


def get_platform_blocked_paths() -> list[str]:
    return _default_paths().default_blocked_paths()
