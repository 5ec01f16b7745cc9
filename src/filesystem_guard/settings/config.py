"""
Filesystem guard configuration.

This module provides configuration management for the guard: server
connection settings, the security policy snapshot, operation toggles and
notification preferences. Configuration can be loaded from YAML/JSON files
or from environment variables.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from filesystem_guard.security.policy import SecurityPolicy
from filesystem_guard.security.validator import PathSecurityValidator

MIN_TIMEOUT_MS = 1_000
HIGH_TIMEOUT_MS = 300_000
MIN_FILE_SIZE = 1_024
HIGH_FILE_SIZE = 10_737_418_240  # 10 GB
HIGH_OPERATIONS_PER_MINUTE = 1_000
LOW_REFRESH_INTERVAL_MS = 1_000

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class ServerSettings(BaseModel):
    """Connection settings for the external filesystem server."""

    model_config = {"extra": "forbid"}

    server_path: str = Field(
        default="",
        description="Path to the filesystem server executable",
    )
    auto_start: bool = Field(
        default=True,
        description="Start the server automatically",
    )
    timeout_ms: int = Field(
        default=30_000,
        description="Request timeout in milliseconds",
    )
    log_level: Literal["debug", "info", "warn", "error"] = Field(
        default="info",
        description="Log level",
    )

    @property
    def logging_level(self) -> int:
        return _LOG_LEVELS[self.log_level]


class OperationsSettings(BaseModel):
    """Feature toggles for filesystem operations."""

    model_config = {"extra": "forbid"}

    enable_batch: bool = True
    enable_watch: bool = True
    enable_search: bool = True
    enable_checksum: bool = True


class UISettings(BaseModel):
    """Notification preferences."""

    model_config = {"extra": "forbid"}

    refresh_interval_ms: int = Field(
        default=5_000,
        description="Refresh interval in milliseconds (0 disables refreshing)",
    )
    show_notifications: bool = True
    show_security_warnings: bool = True
    confirm_dangerous_operations: bool = True


@dataclass
class SettingsValidationResult:
    """Result of checking settings for consistency."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class GuardConfig(BaseModel):
    """
    Complete filesystem guard configuration.

    Example:
        ```python
        config = GuardConfig.from_file("~/.fsguard/config.yaml")
        result = config.validate_settings()
        if not result.valid:
            raise ValueError(", ".join(result.errors))

        validator = config.create_validator(workspace_folder="/home/alice/project")
        ```
    """

    model_config = {"extra": "forbid"}

    server: ServerSettings = Field(default_factory=ServerSettings)
    security: SecurityPolicy = Field(default_factory=SecurityPolicy)
    operations: OperationsSettings = Field(default_factory=OperationsSettings)
    ui: UISettings = Field(default_factory=UISettings)

    def validate_settings(self) -> SettingsValidationResult:
        """
        Check settings for invalid or risky values.

        Returns:
            SettingsValidationResult with errors (invalid) and warnings (risky)
        """
        result = SettingsValidationResult()
        errors, warnings = result.errors, result.warnings
        security = self.security

        if self.server.timeout_ms < MIN_TIMEOUT_MS:
            errors.append(f"Server timeout must be at least {MIN_TIMEOUT_MS}ms")
        if self.server.timeout_ms > HIGH_TIMEOUT_MS:
            warnings.append("Server timeout is very high (>5 minutes)")

        if security.max_file_size < MIN_FILE_SIZE:
            errors.append(f"Max file size must be at least {MIN_FILE_SIZE} bytes")
        if security.max_file_size > HIGH_FILE_SIZE:
            warnings.append("Max file size is very large (>10 GB)")

        if security.max_batch_size < security.max_file_size:
            errors.append("Max batch size must be at least as large as max file size")

        if security.max_operations_per_minute < 1:
            errors.append("Max operations per minute must be at least 1")
        if security.max_operations_per_minute > HIGH_OPERATIONS_PER_MINUTE:
            warnings.append(
                f"Max operations per minute is very high (>{HIGH_OPERATIONS_PER_MINUTE})"
            )

        if not security.blocked_paths:
            warnings.append(
                "No blocked paths configured - consider blocking sensitive directories"
            )
        if not security.blocked_patterns:
            warnings.append(
                "No blocked patterns configured - consider blocking sensitive file patterns"
            )

        if self.ui.refresh_interval_ms < 0:
            errors.append("Refresh interval cannot be negative")
        if 0 < self.ui.refresh_interval_ms < LOW_REFRESH_INTERVAL_MS:
            warnings.append(
                "Refresh interval is very low (<1 second) - may impact performance"
            )

        return result

    def create_validator(
        self, workspace_folder: Optional[str] = None
    ) -> PathSecurityValidator:
        """Build a validator for this configuration's security policy."""
        return PathSecurityValidator(self.security.resolve_workspace(workspace_folder))

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "GuardConfig":
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary (None or empty = defaults)

        Returns:
            GuardConfig instance
        """
        return cls(**(data or {}))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GuardConfig":
        """
        Load configuration from a YAML or JSON file.

        File format (YAML):
            ```yaml
            server:
              timeout_ms: 30000
              log_level: info

            security:
              workspace_root: ${workspaceFolder}
              blocked_paths: [.git, .env, node_modules]
              blocked_patterns: ["*.key", "*.pem"]
              max_file_size: 104857600

            ui:
              show_notifications: true
            ```

        Args:
            path: Path to configuration file

        Returns:
            Loaded GuardConfig instance

        Raises:
            FileNotFoundError: If the config file doesn't exist
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text()

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "FSGUARD_") -> "GuardConfig":
        """
        Load configuration from environment variables.

        Nested fields use "__" as delimiter, for example:
            FSGUARD_SERVER__TIMEOUT_MS=5000
            FSGUARD_SECURITY__WORKSPACE_ROOT=/home/alice/project
            FSGUARD_SECURITY__BLOCKED_PATTERNS='["*.pem", "*.key"]'

        Args:
            prefix: Environment variable prefix

        Returns:
            GuardConfig instance
        """
        environment = GuardEnvironment(_env_prefix=prefix)
        return cls.from_dict(environment.model_dump())

    def __str__(self) -> str:
        return (
            f"GuardConfig(workspace_root={self.security.workspace_root}, "
            f"log_level={self.server.log_level})"
        )


class GuardEnvironment(BaseSettings):
    """Environment-variable source for GuardConfig."""

    model_config = SettingsConfigDict(
        env_prefix="FSGUARD_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    security: SecurityPolicy = Field(default_factory=SecurityPolicy)
    operations: OperationsSettings = Field(default_factory=OperationsSettings)
    ui: UISettings = Field(default_factory=UISettings)
