"""Requirement declaration exceptions."""

from __future__ import annotations

from phpcheck.exceptions.base import PhpCheckError

__all__ = ["InvalidRequirementError"]


class InvalidRequirementError(PhpCheckError):
    """Raised when a requirement is declared incorrectly.

    This is a programming error in a requirement set, not a property of the
    checked host: for example a configuration requirement evaluated by a
    predicate but declared without its test message or help text. It is
    raised while the requirement is being built and is never turned into a
    failed requirement.

    Attributes:
        option: The configuration option the faulty declaration refers to.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        """Initialize the invalid requirement error.

        Args:
            message: Human-readable error message.
            option: Optional configuration option name.
        """
        self.option = option
        super().__init__(message)
