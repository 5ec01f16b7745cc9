"""
Settings and configuration for the filesystem guard.

Example:
    ```python
    from filesystem_guard.settings import GuardConfig

    config = GuardConfig.from_file("~/.fsguard/config.yaml")
    print(config.security.blocked_paths)
    ```
"""

from filesystem_guard.settings.config import (
    GuardConfig,
    GuardEnvironment,
    OperationsSettings,
    ServerSettings,
    SettingsValidationResult,
    UISettings,
)

__all__ = [
    "GuardConfig",
    "GuardEnvironment",
    "OperationsSettings",
    "ServerSettings",
    "SettingsValidationResult",
    "UISettings",
]
