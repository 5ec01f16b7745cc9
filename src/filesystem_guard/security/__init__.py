"""
Path security boundary.

Decides, for every path a caller proposes to touch, whether the operation
is permitted under a SecurityPolicy.
"""

from filesystem_guard.security.policy import WORKSPACE_PLACEHOLDER, SecurityPolicy
from filesystem_guard.security.validator import (
    PathSecurityValidator,
    ValidationResult,
    compile_blocked_pattern,
)

__all__ = [
    "WORKSPACE_PLACEHOLDER",
    "SecurityPolicy",
    "PathSecurityValidator",
    "ValidationResult",
    "compile_blocked_pattern",
]
