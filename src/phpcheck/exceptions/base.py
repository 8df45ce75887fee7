from __future__ import annotations


class PhpCheckError(Exception):
    """Base exception class for all phpcheck-specific errors.

    All custom exceptions raised by phpcheck inherit from this class, so the
    CLI boundary can catch them in one place while letting system exceptions
    propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            snapshot = probe_runtime("php")
        except PhpCheckError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the PhpCheckError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
