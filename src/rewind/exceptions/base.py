from __future__ import annotations


class RewindError(Exception):
    """Base exception class for all Rewind-specific errors.

    This is the root of the Rewind exception hierarchy. Catching it at the
    CLI boundary handles every failure Rewind itself reports while letting
    programming errors propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            children = await projection.resolve_children(node)
        except RewindError as e:
            click.echo(format_error(e.message), err=True)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the RewindError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
