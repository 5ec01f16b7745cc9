"""
User-facing messages and recovery suggestions.

Turns a classified FilesystemError into a short explanation a user can
act on. Known error codes in the raw message select a specific template;
anything else falls back to "<Category> error: <raw message>".
"""

from typing import Callable

from filesystem_guard.errors.types import ErrorCategory, FilesystemError


def get_user_error_message(error: FilesystemError) -> str:
    message = error.message
    if "ENOENT" in message or "not found" in message:
        return "The file or directory could not be found"
    if "EACCES" in message or "permission denied" in message:
        return "Permission denied - you don't have access to this file or directory"
    if "EISDIR" in message:
        return "Expected a file but found a directory"
    if "ENOTDIR" in message:
        return "Expected a directory but found a file"
    if "EEXIST" in message:
        return "The file or directory already exists"
    return f"Invalid operation: {message}"


def get_system_error_message(error: FilesystemError) -> str:
    message = error.message
    if "ENOSPC" in message:
        return "No space left on device"
    if "EMFILE" in message:
        return "Too many open files"
    if "ENOMEM" in message:
        return "Out of memory"
    return f"System error: {message}"


def get_network_error_message(error: FilesystemError) -> str:
    message = error.message
    if "ECONNREFUSED" in message:
        return "Could not connect to MCP server - connection refused"
    if "ETIMEDOUT" in message or "timeout" in message:
        return "Connection to MCP server timed out"
    if "ENOTFOUND" in message:
        return "MCP server not found"
    return f"Network error: {message}"


def get_security_message(error: FilesystemError) -> str:
    """
    Explain why access was denied.

    Uses the "path" context entry together with "boundary" or "pattern"
    when the validator supplied them.
    """
    path = error.context.get("path")
    boundary = error.context.get("boundary")
    pattern = error.context.get("pattern")

    if path and boundary:
        return f'Access denied: "{path}" is outside the allowed boundary "{boundary}"'
    if path and pattern:
        return f'Access denied: "{path}" matches blocked pattern "{pattern}"'
    if path:
        return f'Access denied: "{path}" is blocked by security settings'
    return f"Security violation: {error.message}"


def get_configuration_error_message(error: FilesystemError) -> str:
    return f"Configuration error: {error.message}"


_MESSAGE_BUILDERS: dict[ErrorCategory, Callable[[FilesystemError], str]] = {
    ErrorCategory.USER: get_user_error_message,
    ErrorCategory.SYSTEM: get_system_error_message,
    ErrorCategory.NETWORK: get_network_error_message,
    ErrorCategory.SECURITY: get_security_message,
    ErrorCategory.CONFIGURATION: get_configuration_error_message,
}


def get_user_friendly_message(error: FilesystemError) -> str:
    """Convert a classified error into an understandable message."""
    builder = _MESSAGE_BUILDERS.get(error.category)
    if builder is None:
        return f"An error occurred: {error.message}"
    return builder(error)


def get_recovery_suggestions(error: FilesystemError) -> list[str]:
    """Return recovery suggestions for a classified error."""
    message = error.message
    suggestions: list[str] = []

    if error.category == ErrorCategory.USER:
        if "not found" in message or "ENOENT" in message:
            suggestions.append("Check that the file or directory exists")
            suggestions.append("Verify the path is correct")
        if (
            "permission denied" in message
            or "access denied" in message
            or "EACCES" in message
        ):
            suggestions.append("Check file permissions")
            suggestions.append("Try running the editor with appropriate permissions")

    elif error.category == ErrorCategory.SYSTEM:
        suggestions.append("Check system resources (disk space, memory)")
        suggestions.append("Try restarting the editor")
        suggestions.append("Check the output log for details")

    elif error.category == ErrorCategory.NETWORK:
        suggestions.append("Check that the MCP server is running")
        suggestions.append("Verify network connectivity")
        suggestions.append("Try restarting the MCP server")

    elif error.category == ErrorCategory.SECURITY:
        suggestions.append("Review security settings in extension configuration")
        suggestions.append("Check blocked paths and patterns")
        path = error.context.get("path")
        if path:
            suggestions.append(f'The path "{path}" may be blocked by security settings')

    elif error.category == ErrorCategory.CONFIGURATION:
        suggestions.append("Review extension settings")
        suggestions.append("Reset to default configuration")
        suggestions.append("Check for invalid setting values")

    return suggestions
