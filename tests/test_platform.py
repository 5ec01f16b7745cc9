"""
Tests for platform detection and path utilities.
"""

import pytest

from filesystem_guard.platform import (
    PlatformPaths,
    PlatformType,
    detect_platform,
    get_platform_info,
    reset_platform_info,
)

SAMPLE_PATHS = [
    "",
    ".",
    "..",
    "/",
    "a",
    "a/b/c",
    "a//b///c/",
    "a\\b\\\\c",
    "./a/./b/../c",
    "../../x",
    "/usr/local/../bin",
    "~/projects//demo",
    "C:/Users/alice/./docs",
    "c:\\Users\\alice\\..\\bob",
    "mixed/sep\\path/..\\file.txt",
]


class TestPlatformDetection:
    """Test detect_platform and the cached accessor."""

    @pytest.mark.parametrize(
        "system,expected,separator",
        [
            ("win32", PlatformType.WINDOWS, "\\"),
            ("cygwin", PlatformType.WINDOWS, "\\"),
            ("darwin", PlatformType.MACOS, "/"),
            ("linux", PlatformType.LINUX, "/"),
            ("freebsd14", PlatformType.UNKNOWN, "/"),
        ],
    )
    def test_detect_platform(self, system, expected, separator):
        """Test platform type and separator detection."""
        info = detect_platform(system, home="/h", temp="/t")
        assert info.type == expected
        assert info.path_separator == separator
        assert info.is_windows == (expected == PlatformType.WINDOWS)
        assert info.is_macos == (expected == PlatformType.MACOS)
        assert info.is_linux == (expected == PlatformType.LINUX)

    def test_detect_host_platform(self):
        """Test that host detection fills in home and temp directories."""
        info = detect_platform()
        assert info.home_directory
        assert info.temp_directory

    def test_platform_info_is_cached(self):
        """Test that repeated calls return the same instance."""
        reset_platform_info()
        first = get_platform_info()
        assert get_platform_info() is first

    def test_reset_platform_info(self):
        """Test that reset forces re-detection."""
        first = get_platform_info()
        reset_platform_info()
        second = get_platform_info()
        assert second == first
        assert second is not first

    def test_platform_info_is_immutable(self, linux):
        """Test that PlatformInfo cannot be mutated."""
        with pytest.raises(AttributeError):
            linux.home_directory = "/root"


class TestNormalize:
    """Test path normalization."""

    def test_collapses_separators_and_dots(self, linux):
        """Test collapsing of separator runs and dot segments."""
        paths = PlatformPaths(linux)
        assert paths.normalize("a//b/../c") == "a/c"
        assert paths.normalize("a\\b") == "a/b"
        assert paths.normalize("/usr/./local/") == "/usr/local"

    def test_windows_separators(self, windows):
        """Test that Windows paths use backslashes."""
        paths = PlatformPaths(windows)
        assert paths.normalize("C:/Users//alice/./docs") == "C:\\Users\\alice\\docs"
        assert paths.normalize("a/b\\..\\c") == "a\\c"

    def test_empty_path(self, linux):
        """Test that an empty path normalizes to the current directory."""
        assert PlatformPaths(linux).normalize("") == "."

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_idempotent_posix(self, linux, path):
        """Test normalize(normalize(p)) == normalize(p) on POSIX."""
        paths = PlatformPaths(linux)
        once = paths.normalize(path)
        assert paths.normalize(once) == once

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_idempotent_windows(self, windows, path):
        """Test normalize(normalize(p)) == normalize(p) on Windows."""
        paths = PlatformPaths(windows)
        once = paths.normalize(path)
        assert paths.normalize(once) == once


class TestPathHelpers:
    """Test join, decomposition and conversion helpers."""

    def test_join(self, linux):
        """Test joining skips empty segments."""
        paths = PlatformPaths(linux)
        assert paths.join("a", "", "b") == "a/b"
        assert paths.join("/base/", "sub/", "file.txt") == "/base/sub/file.txt"

    def test_join_single_segment_unchanged(self, linux):
        """Test that a single segment is returned as given."""
        assert PlatformPaths(linux).join("a//b") == "a//b"
        assert PlatformPaths(linux).join("", "a//b", "") == "a//b"

    def test_join_nothing(self, linux):
        """Test joining no segments."""
        assert PlatformPaths(linux).join() == "."

    def test_join_windows(self, windows):
        """Test joining with the Windows separator."""
        assert PlatformPaths(windows).join("C:\\work", "src", "main.py") == "C:\\work\\src\\main.py"

    def test_slash_conversion(self):
        """Test forward/backslash conversion."""
        assert PlatformPaths.to_forward_slashes("C:\\a\\b") == "C:/a/b"
        assert PlatformPaths.to_backslashes("a/b/c") == "a\\b\\c"

    def test_basename_and_dirname(self, linux):
        """Test basename and dirname, including trailing separators."""
        paths = PlatformPaths(linux)
        assert paths.basename("/a/b/file.txt") == "file.txt"
        assert paths.basename("/a/b/") == "b"
        assert paths.dirname("/a/b/file.txt") == "/a/b"
        assert paths.dirname("file.txt") == "."
        assert paths.dirname("/") == "/"

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("main.py", ".py"),
            ("archive.tar.gz", ".gz"),
            ("README", ""),
            (".bashrc", ""),
            ("/a/b.c/file", ""),
        ],
    )
    def test_extension(self, linux, path, expected):
        """Test extension extraction."""
        assert PlatformPaths(linux).extension(path) == expected

    def test_resolve(self, linux):
        """Test resolving against an absolute base."""
        paths = PlatformPaths(linux)
        assert paths.resolve("/base", "x/../y") == "/base/y"
        assert paths.resolve("/base", "/other/z") == "/other/z"
        assert paths.resolve("/base", "") == "/base"

    def test_resolve_is_absolute(self):
        """Test that resolve always returns an absolute path on the host."""
        paths = PlatformPaths()
        assert paths.is_absolute(paths.resolve("relative", "child"))
        assert paths.is_absolute(paths.resolve("", ""))

    def test_expand_home(self, linux):
        """Test home directory expansion."""
        paths = PlatformPaths(linux)
        assert paths.expand_home("~") == "/home/alice"
        assert paths.expand_home("~/.ssh") == "/home/alice/.ssh"
        assert paths.expand_home("~bob/x") == "~bob/x"
        assert paths.expand_home("/abs/~") == "/abs/~"


class TestFormatForDisplay:
    """Test display formatting."""

    def test_home_replaced(self, linux):
        """Test that the home prefix becomes ~."""
        paths = PlatformPaths(linux)
        assert paths.format_for_display("/home/alice/project") == "~/project"
        assert paths.format_for_display("/home/alice") == "~"

    def test_home_prefix_must_be_whole_segment(self, linux):
        """Test that a sibling directory sharing the prefix is untouched."""
        assert PlatformPaths(linux).format_for_display("/home/alicebob/x") == "/home/alicebob/x"

    def test_windows_drive_uppercased(self, windows):
        """Test drive letter upper-casing on Windows."""
        paths = PlatformPaths(windows)
        assert paths.format_for_display("d:\\data") == "D:\\data"
        assert paths.format_for_display("c:/users/alice/docs") == "~\\docs"

    @pytest.mark.parametrize(
        "path",
        SAMPLE_PATHS + ["/home/alice/a", "c:\\Users\\alice\\x", "C:\\Users\\ALICE"],
    )
    def test_idempotent(self, linux, windows, macos, path):
        """Test format(format(p)) == format(p) on every platform."""
        for info in (linux, windows, macos):
            paths = PlatformPaths(info)
            once = paths.format_for_display(path)
            assert paths.format_for_display(once) == once


class TestDefaultBlockedPaths:
    """Test platform baseline blocklists."""

    @pytest.mark.parametrize("fixture", ["linux", "macos", "windows"])
    def test_common_entries(self, request, fixture):
        """Test entries shared by every platform."""
        blocked = PlatformPaths(request.getfixturevalue(fixture)).default_blocked_paths()
        for entry in (".git", ".env", "node_modules"):
            assert entry in blocked

    def test_linux_entries(self, linux):
        """Test Linux system directories."""
        blocked = PlatformPaths(linux).default_blocked_paths()
        assert "/sys" in blocked
        assert "/proc" in blocked
        assert "~/.gnupg" in blocked

    def test_macos_entries(self, macos):
        """Test macOS system directories."""
        blocked = PlatformPaths(macos).default_blocked_paths()
        assert "/System" in blocked
        assert "/Library" in blocked
        assert "~/.ssh" in blocked

    def test_windows_entries(self, windows):
        """Test Windows system directories and wildcard entries."""
        blocked = PlatformPaths(windows).default_blocked_paths()
        assert "C:\\Windows" in blocked
        assert "C:\\Program Files" in blocked
        assert "C:\\Users\\*\\AppData" in blocked

    def test_unknown_platform_has_common_only(self):
        """Test that unknown platforms get the common entries only."""
        info = detect_platform("sunos5", home="/h", temp="/t")
        assert PlatformPaths(info).default_blocked_paths() == [".git", ".env", "node_modules"]


class TestShell:
    """Test shell helpers."""

    def test_shell_posix(self, linux, monkeypatch):
        """Test SHELL lookup with fallback."""
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert PlatformPaths(linux).shell() == "/bin/zsh"
        monkeypatch.delenv("SHELL")
        assert PlatformPaths(linux).shell() == "/bin/sh"

    def test_shell_windows(self, windows, monkeypatch):
        """Test COMSPEC lookup with fallback."""
        monkeypatch.delenv("COMSPEC", raising=False)
        assert PlatformPaths(windows).shell() == "cmd.exe"

    def test_command_syntax(self, linux, windows):
        """Test quoting and escaping of commands with spaces."""
        assert PlatformPaths(linux).command_syntax("my tool") == "my\\ tool"
        assert PlatformPaths(windows).command_syntax("my tool") == '"my tool"'
        assert PlatformPaths(windows).command_syntax("tool") == "tool"
