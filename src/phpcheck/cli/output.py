"""Output formatting helpers for messages printed outside the report."""

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
        ...     "PHP executable not found: php8.4",
        ...     suggestion="Pass --php or set PHPCHECK_PHP_BINARY",
        ... ))
        Error: PHP executable not found: php8.4
        Suggestion: Pass --php or set PHPCHECK_PHP_BINARY
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)
