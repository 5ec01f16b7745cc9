"""
Path security validation.

Decides whether a candidate path may be touched under a SecurityPolicy.
Validation is deterministic and has no side effects apart from logging
denials.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from filesystem_guard.errors.types import PathSecurityError, WorkspaceNotResolvedError
from filesystem_guard.platform.detection import PlatformInfo
from filesystem_guard.platform.paths import PlatformPaths
from filesystem_guard.security.policy import SecurityPolicy

logger = logging.getLogger(__name__)

VIOLATION_PATTERN = "pattern"
VIOLATION_DIRECTORY = "directory"
VIOLATION_BOUNDARY = "boundary"


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one path.

    reason is set exactly when the path is denied.
    """

    allowed: bool
    reason: Optional[str] = None
    path: Optional[str] = None
    matched_entry: Optional[str] = None
    violation: Optional[str] = None

    def __post_init__(self):
        if self.allowed and self.reason is not None:
            raise ValueError("An allowed result cannot carry a reason")
        if not self.allowed and not self.reason:
            raise ValueError("A denied result must carry a reason")

    @classmethod
    def allow(cls, path: Optional[str] = None) -> "ValidationResult":
        return cls(allowed=True, path=path)

    @classmethod
    def deny(
        cls,
        reason: str,
        *,
        path: Optional[str] = None,
        matched_entry: Optional[str] = None,
        violation: Optional[str] = None,
    ) -> "ValidationResult":
        return cls(
            allowed=False,
            reason=reason,
            path=path,
            matched_entry=matched_entry,
            violation=violation,
        )

    def __bool__(self) -> bool:
        return self.allowed


def compile_blocked_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern:
    """
    Compile a blocked pattern into a prefix-anchored regex.

    Each run of "*" matches any characters; every other character,
    including regex metacharacters, is literal.
    """
    regex = ".*".join(re.escape(part) for part in re.split(r"\*+", pattern))
    return re.compile(regex, re.IGNORECASE if ignore_case else 0)


class PathSecurityValidator:
    """
    Validates paths against blocked paths, blocked patterns and the
    workspace boundary.

    The effective blocklist is evaluated in a fixed order: platform
    defaults, then the policy's blocked paths, then its blocked patterns.
    The first matching entry decides the reported reason.

    Usage:
        validator = PathSecurityValidator(policy)
        result = validator.validate(".git/config")
        if not result.allowed:
            print(result.reason)  # "Path is within blocked directory: .git"

        validator.enforce("/workspace/src/main.py")  # raises PathSecurityError
    """

    def __init__(
        self,
        policy: Optional[SecurityPolicy] = None,
        platform: Optional[PlatformInfo] = None,
    ):
        """
        Initialize the validator.

        Args:
            policy: Security policy (None = platform baseline only)
            platform: Platform conventions (default: detected host platform)
        """
        self.policy = policy
        self.paths = PlatformPaths(platform)
        self._ignore_case = self.paths.info.is_windows
        self._blocked_entries = self._build_blocked_entries()
        self._prepared = [
            (entry, self._prepare_entry(entry)) for entry in self._blocked_entries
        ]

    @property
    def blocked_entries(self) -> list[str]:
        """Effective blocklist, in evaluation order."""
        return list(self._blocked_entries)

    def _build_blocked_entries(self) -> list[str]:
        entries = self.paths.default_blocked_paths()
        if self.policy is not None:
            entries += self.policy.blocked_paths + self.policy.blocked_patterns
        return list(dict.fromkeys(entries))

    def _prepare_entry(self, entry: str):
        expanded = self.paths.normalize(self.paths.expand_home(entry))
        if "*" in entry:
            return compile_blocked_pattern(expanded, self._ignore_case)
        return self._fold(expanded)

    def _fold(self, path: str) -> str:
        return path.casefold() if self._ignore_case else path

    def _prepare_candidate(self, path: str) -> str:
        return self._fold(self.paths.normalize(self.paths.expand_home(path)))

    def validate(self, path: str) -> ValidationResult:
        """
        Check a path against the effective blocklist.

        The path is normalized before matching, so ".." segments cannot
        sidestep a blocked prefix. An empty path is allowed.

        Args:
            path: Candidate path

        Returns:
            ValidationResult; denied results name the matched entry
        """
        if not path:
            return ValidationResult.allow(path)

        candidate = self._prepare_candidate(path)
        separator = self.paths.separator

        for entry, prepared in self._prepared:
            if isinstance(prepared, re.Pattern):
                if prepared.match(candidate):
                    return self._deny(
                        path,
                        f"Path matches blocked pattern: {entry}",
                        entry,
                        VIOLATION_PATTERN,
                    )
            elif candidate == prepared or candidate.startswith(prepared + separator):
                return self._deny(
                    path,
                    f"Path is within blocked directory: {entry}",
                    entry,
                    VIOLATION_DIRECTORY,
                )

        return ValidationResult.allow(path)

    def _workspace_root(self) -> str:
        root = self.policy.workspace_root
        if self.policy.has_unresolved_placeholder:
            raise WorkspaceNotResolvedError(root)
        return self.paths.resolve(self.paths.expand_home(root), "")

    def _is_within(self, path: str, directory: str) -> bool:
        path, directory = self._fold(path), self._fold(directory)
        directory = directory.rstrip(self.paths.separator)
        return path == directory or path.startswith(directory + self.paths.separator)

    def validate_boundary(self, path: str) -> ValidationResult:
        """
        Check that a path stays inside the workspace boundary.

        Relative paths are resolved against the workspace root. When the
        policy lists allowed subdirectories, the path must also fall in
        one of them.

        Raises:
            WorkspaceNotResolvedError: If the root still holds the placeholder
        """
        if not path or self.policy is None:
            return ValidationResult.allow(path)

        root = self._workspace_root()
        resolved = self.paths.resolve(root, self.paths.expand_home(path))

        if not self._is_within(resolved, root):
            return self._deny(
                path,
                f"Path is outside the workspace boundary: {self.policy.workspace_root}",
                self.policy.workspace_root,
                VIOLATION_BOUNDARY,
            )

        subdirectories = self.policy.allowed_subdirectories
        if subdirectories and not any(
            self._is_within(resolved, self.paths.resolve(root, sub))
            for sub in subdirectories
        ):
            allowed = ", ".join(subdirectories)
            return self._deny(
                path,
                f"Path is outside the allowed subdirectories boundary: {allowed}",
                allowed,
                VIOLATION_BOUNDARY,
            )

        return ValidationResult.allow(path)

    def _relative_to_root(self, path: str) -> Optional[str]:
        root = self._workspace_root()
        resolved = self.paths.resolve(root, self.paths.expand_home(path))
        root = root.rstrip(self.paths.separator)
        if len(resolved) <= len(root):
            return None
        return resolved[len(root) + 1:]

    def check(self, path: str) -> ValidationResult:
        """
        Full admissibility check.

        Runs the boundary check (when a policy is present), then the
        blocklist against the path as given and, for paths inside the
        workspace, against its workspace-relative form so relative entries
        such as ".git" also catch "<root>/.git/config".
        """
        if not path:
            return ValidationResult.allow(path)

        if self.policy is None:
            return self.validate(path)

        result = self.validate_boundary(path)
        if not result.allowed:
            return result

        result = self.validate(path)
        if not result.allowed:
            return result

        relative = self._relative_to_root(path)
        if relative:
            result = self.validate(relative)
            if not result.allowed:
                return ValidationResult.deny(
                    result.reason,
                    path=path,
                    matched_entry=result.matched_entry,
                    violation=result.violation,
                )

        return ValidationResult.allow(path)

    def enforce(self, path: str) -> str:
        """
        Check a path and raise if it is denied.

        Args:
            path: Candidate path

        Returns:
            The normalized path

        Raises:
            PathSecurityError: If the path is denied
            WorkspaceNotResolvedError: If the workspace root is unresolved
        """
        result = self.check(path)
        if not result.allowed:
            raise PathSecurityError(
                path,
                result.reason,
                boundary=result.matched_entry if result.violation == VIOLATION_BOUNDARY else None,
                pattern=result.matched_entry if result.violation == VIOLATION_PATTERN else None,
                blocked_path=(
                    result.matched_entry if result.violation == VIOLATION_DIRECTORY else None
                ),
            )
        return self.paths.normalize(path) if path else path

    def _deny(
        self, path: str, reason: str, entry: str, violation: str
    ) -> ValidationResult:
        logger.warning(f"Access denied to {path}: {reason}")
        return ValidationResult.deny(
            reason, path=path, matched_entry=entry, violation=violation
        )
