"""
Example: Guarding file access in an editor extension

This example shows how an editor integration can check the paths an
agent wants to touch, report denials through the error handler, and
coalesce a burst of identical failures into a single summary.
"""

import logging
from datetime import datetime, timedelta, timezone

from filesystem_guard import (
    ErrorAggregator,
    ErrorHandler,
    GuardConfig,
    PathSecurityError,
    RichPresenter,
)


def check_requested_paths(workspace: str) -> None:
    """Validate a batch of paths an agent asked for."""
    config = GuardConfig.from_dict(
        {
            "security": {
                "workspace_root": "${workspaceFolder}",
                "blocked_patterns": ["*.key", "*secret*"],
            }
        }
    )
    validator = config.create_validator(workspace_folder=workspace)
    handler = ErrorHandler(RichPresenter())

    requested = [
        "src/main.py",
        ".git/config",
        "deploy/server.key",
        "../outside.txt",
    ]

    for path in requested:
        try:
            normalized = validator.enforce(path)
            print(f"✓ {normalized}")
        except PathSecurityError as e:
            handler.handle_error(e)


def simulate_error_burst() -> None:
    """Show how repeated failures are aggregated."""
    handler = ErrorHandler(RichPresenter(), ErrorAggregator(window_seconds=5.0))
    start = datetime.now(timezone.utc)

    # Ten identical failures within one second: only the first is shown
    for i in range(10):
        handler.handle_exception(
            ConnectionRefusedError("ECONNREFUSED: connection refused"),
            now=start + timedelta(milliseconds=100 * i),
        )

    # Once the window has passed, the next repeat flushes a summary
    handler.handle_exception(
        ConnectionRefusedError("ECONNREFUSED: connection refused"),
        now=start + timedelta(seconds=6),
    )
    handler.dispose()


def main():
    logging.basicConfig(level=logging.CRITICAL)

    print("=" * 60)
    print("Checking requested paths")
    print("=" * 60)
    check_requested_paths("/tmp/example-workspace")

    print()
    print("=" * 60)
    print("Aggregating repeated errors")
    print("=" * 60)
    simulate_error_burst()


if __name__ == "__main__":
    main()
