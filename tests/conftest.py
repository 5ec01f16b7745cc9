"""Shared fixtures: platform descriptions for each supported OS."""

import pytest

from filesystem_guard.platform import detect_platform


@pytest.fixture
def linux():
    """A Linux platform with a fixed home directory."""
    return detect_platform("linux", home="/home/alice", temp="/tmp")


@pytest.fixture
def macos():
    """A macOS platform with a fixed home directory."""
    return detect_platform("darwin", home="/Users/alice", temp="/private/tmp")


@pytest.fixture
def windows():
    """A Windows platform with a fixed home directory."""
    return detect_platform("win32", home="C:\\Users\\alice", temp="C:\\Temp")
