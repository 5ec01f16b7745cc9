"""
Command-line interface for filesystem-guard.
"""

from filesystem_guard.cli.main import cli, main

__all__ = ["cli", "main"]
