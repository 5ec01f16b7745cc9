"""
Security policy snapshot.

A SecurityPolicy is a read-only value the caller builds from its own
configuration source and hands to the validator. The validator never
mutates it and never loads or saves it.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

WORKSPACE_PLACEHOLDER = "${workspaceFolder}"


class SecurityPolicy(BaseModel):
    """
    Path security policy.

    Defines the workspace boundary, the paths and glob patterns that are
    always denied, and resource limits enforced by the operation executor.

    Example:
        ```python
        policy = SecurityPolicy(
            workspace_root="/home/alice/project",
            blocked_paths=[".git", ".env"],
            blocked_patterns=["*.pem", "*secret*"],
        )
        ```

    Editor-style camelCase keys (workspaceRoot, blockedPaths, ...) are
    accepted as well.
    """

    model_config = {"extra": "forbid", "populate_by_name": True, "frozen": True}

    workspace_root: str = Field(
        default=WORKSPACE_PLACEHOLDER,
        alias="workspaceRoot",
        description="Root directory outside of which operations are denied",
    )

    allowed_subdirectories: list[str] = Field(
        default_factory=list,
        alias="allowedSubdirectories",
        description="Subdirectories of the root that may be accessed (empty = whole root)",
    )

    blocked_paths: list[str] = Field(
        default_factory=lambda: [".git", ".env", "node_modules", ".ssh"],
        alias="blockedPaths",
        description="Literal or prefix paths that are always denied",
    )

    blocked_patterns: list[str] = Field(
        default_factory=lambda: ["*.key", "*.pem", "*.env", "*secret*", "*password*"],
        alias="blockedPatterns",
        description="Glob patterns ('*' wildcard) that are always denied",
    )

    max_file_size: int = Field(
        default=104_857_600,  # 100 MB
        ge=0,
        alias="maxFileSize",
        description="Maximum size of a single file operation (bytes)",
    )

    max_batch_size: int = Field(
        default=1_073_741_824,  # 1 GB
        ge=0,
        alias="maxBatchSize",
        description="Maximum total size of a batch operation (bytes)",
    )

    max_operations_per_minute: int = Field(
        default=100,
        ge=0,
        alias="maxOperationsPerMinute",
        description="Rate limit for filesystem operations",
    )

    @field_validator(
        "allowed_subdirectories", "blocked_paths", "blocked_patterns", mode="before"
    )
    @classmethod
    def drop_blank_entries(cls, v):
        """Strip whitespace and drop empty entries."""
        if v is None:
            return []
        return [entry.strip() for entry in v if entry and entry.strip()]

    @property
    def has_unresolved_placeholder(self) -> bool:
        return WORKSPACE_PLACEHOLDER in self.workspace_root

    def resolve_workspace(self, folder: Optional[str]) -> "SecurityPolicy":
        """
        Substitute the workspace placeholder.

        Args:
            folder: Workspace folder to substitute (None leaves the policy unchanged)

        Returns:
            A new policy with the placeholder replaced
        """
        if folder is None or not self.has_unresolved_placeholder:
            return self
        return self.model_copy(
            update={"workspace_root": self.workspace_root.replace(WORKSPACE_PLACEHOLDER, folder)}
        )

    def __repr__(self) -> str:
        return (
            f"SecurityPolicy("
            f"workspace_root={self.workspace_root!r}, "
            f"blocked_paths={len(self.blocked_paths)}, "
            f"blocked_patterns={len(self.blocked_patterns)})"
        )
