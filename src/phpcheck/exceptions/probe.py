"""Runtime probe exceptions.

This module provides the exception raised when the PHP runtime cannot be
inspected at all (as opposed to a requirement that is simply not met).
"""

from __future__ import annotations

from phpcheck.exceptions.base import PhpCheckError

__all__ = ["RuntimeProbeError"]


class RuntimeProbeError(PhpCheckError):
    """Raised when the PHP probe script cannot be run or understood.

    Attributes:
        binary: The PHP executable that was invoked.
        returncode: Exit status of the probe process, if it ran.
        stderr: Captured standard error of the probe process, if any.

    Example:
        >>> raise RuntimeProbeError(
        ...     "PHP executable not found: php8.9",
        ...     binary="php8.9",
        ... )
    """

    def __init__(
        self,
        message: str,
        binary: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialize the RuntimeProbeError.

        Args:
            message: Human-readable error message.
            binary: The PHP executable that was invoked.
            returncode: Exit status of the probe process.
            stderr: Captured standard error output.
        """
        self.binary = binary
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
