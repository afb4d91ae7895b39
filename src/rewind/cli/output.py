"""Output formatting utilities for the Rewind CLI."""

from __future__ import annotations

__all__ = [
    "format_error",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Args:
        message: Primary error message.
        details: Optional list of detail lines to include.
        suggestion: Optional suggestion for resolving the error.

    Returns:
        Formatted error string with details and suggestion if provided.

    Example:
        >>> print(format_error(
        ...     "Invalid configuration",
        ...     details=["Field: timeline.max_commits"],
        ...     suggestion="Check rewind.yaml",
        ... ))
        Error: Invalid configuration
          Field: timeline.max_commits
        Suggestion: Check rewind.yaml
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)
