from __future__ import annotations

from typing import Any

from rewind.exceptions.base import RewindError


class ConfigError(RewindError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when rewind.yaml cannot be parsed, or when a value from a YAML
    file or a REWIND_* environment variable fails validation.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field name that caused the error
            (e.g., "timeline.max_commits").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Invalid configuration value",
            field="timeline.max_commits",
            value=0,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
