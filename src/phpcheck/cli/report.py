"""Terminal report of a requirement collection.

The report lists one glyph (or, in verbose mode, one line) per check,
mandatory requirements first, then recommendations, followed by a summary
block and checklists of everything that needs fixing.
"""

from __future__ import annotations

import textwrap

from rich.console import Console

from phpcheck.cli.context import ExitCode
from phpcheck.constants import DEFAULT_LINE_WIDTH
from phpcheck.logging import get_logger
from phpcheck.requirements import Requirement, RequirementCollection

__all__ = ["Reporter", "error_message", "exit_code_for", "wordwrap"]

logger = get_logger(__name__)

#: Named styles used by the report, as Rich style definitions.
STYLES: dict[str, str] = {
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "error": "white on red",
    "success": "white on green",
    "title": "blue",
}


def wordwrap(text: str, width: int, break_with: str) -> str:
    """Wrap text at a column, joining the lines with a continuation string.

    Runs of whitespace collapse to single spaces and words longer than the
    width are kept whole.

    Example:
        >>> wordwrap("PHP version must be at least 8.2.0", 20, "\\n   ")
        'PHP version must be\\n   at least 8.2.0'
    """
    lines = textwrap.wrap(
        " ".join(text.split()),
        width=max(width, 1),
        break_long_words=False,
        break_on_hyphens=False,
    )
    return break_with.join(lines)


def error_message(requirement: Requirement, line_width: int) -> str | None:
    """Format the explanation of an unmet requirement.

    Returns:
        None when the requirement is fulfilled; otherwise the wrapped test
        message followed by the help text, each continuation line prefixed
        with "   " and "   > " respectively.
    """
    if requirement.is_fulfilled():
        return None

    message = wordwrap(requirement.get_test_message(), line_width - 3, "\n   ") + "\n"
    message += (
        "   > "
        + wordwrap(requirement.get_help_text(), line_width - 5, "\n   > ")
        + "\n"
    )
    return message


def exit_code_for(collection: RequirementCollection) -> ExitCode:
    """Exit status for a collection: failure iff a mandatory requirement failed."""
    if collection.get_failed_requirements():
        return ExitCode.FAILURE
    return ExitCode.SUCCESS


class Reporter:
    """Renders a RequirementCollection to a Rich console.

    Whether colours are emitted is decided when the console is created (see
    phpcheck.cli.terminal.make_console); the reporter always writes the same
    text.

    Args:
        console: Destination console.
        verbose: Print one labelled line per check instead of a glyph.
        line_width: Column at which failure explanations are wrapped.
    """

    def __init__(
        self,
        console: Console,
        *,
        verbose: bool = False,
        line_width: int = DEFAULT_LINE_WIDTH,
    ) -> None:
        self._console = console
        self._verbose = verbose
        self._line_width = line_width

    def render(
        self,
        collection: RequirementCollection,
        *,
        ini_file: str | None = None,
    ) -> ExitCode:
        """Write the full report and return the process exit status."""
        self._title("Symfony Requirements Checker")

        self._echo("> PHP is using the following php.ini file:\n")
        if ini_file:
            self._style("green", ini_file)
        else:
            self._style(
                "yellow", "WARNING: No configuration file (php.ini) used by PHP!"
            )
        self._echo("\n\n")

        self._echo("> Checking Symfony requirements:\n\n")

        errors = self._check_all(
            collection.get_requirements(), "red", "E", "[ERROR] "
        )
        warnings = self._check_all(
            collection.get_recommendations(), "yellow", "W", "[WARN] "
        )

        exit_code = exit_code_for(collection)
        if exit_code == ExitCode.SUCCESS:
            self._block("success", "OK", "Your system is ready to run Symfony projects")
        else:
            self._block(
                "error", "ERROR", "Your system is not ready to run Symfony projects"
            )
            self._title("Fix the following mandatory requirements", "red")
            self._checklist(errors)

        if warnings:
            self._title("Optional recommendations to improve your setup", "yellow")
            self._checklist(warnings)

        self._note()

        logger.info(
            "requirements_evaluated",
            requirements=len(collection.get_requirements()),
            recommendations=len(collection.get_recommendations()),
            failed_requirements=len(errors),
            failed_recommendations=len(warnings),
            exit_code=int(exit_code),
        )
        return exit_code

    def _check_all(
        self,
        requirements: list[Requirement],
        failed_style: str,
        glyph: str,
        label: str,
    ) -> list[str]:
        messages: list[str] = []
        for requirement in requirements:
            help_text = error_message(requirement, self._line_width)
            if help_text is not None:
                messages.append(help_text)
                self._status(failed_style, glyph, label, requirement)
            else:
                self._status("green", ".", "[OK] ", requirement)
        return messages

    def _status(
        self, style: str, glyph: str, label: str, requirement: Requirement
    ) -> None:
        if self._verbose:
            self._style(style, label)
            self._echo(requirement.get_test_message() + "\n")
        else:
            self._style(style, glyph)

    def _checklist(self, messages: list[str]) -> None:
        for help_text in messages:
            self._echo(" * " + help_text)

    def _note(self) -> None:
        self._echo("\n")
        self._style("title", "Note")
        self._echo("  The command console can use a different php.ini file\n")
        self._style("title", "~~~~")
        self._echo("  than the one used by your web server.\n")
        self._echo("      Please check that both the console and the web server\n")
        self._echo("      are using the same PHP version and configuration.\n")
        self._echo("\n")

    def _title(self, title: str, style: str = "title") -> None:
        self._echo("\n")
        self._style(style, title)
        self._echo("\n")
        self._style(style, "~" * len(title))
        self._echo("\n\n")

    def _block(self, style: str, title: str, message: str) -> None:
        message = f" {message.strip()} "
        width = len(message)

        self._echo("\n\n")
        self._style(style, " " * width)
        self._echo("\n")
        self._style(style, f" [{title}]".ljust(width))
        self._echo("\n")
        self._style(style, message)
        self._echo("\n")
        self._style(style, " " * width)
        self._echo("\n")

    def _style(self, style: str, message: str) -> None:
        self._console.print(message, style=STYLES[style], end="")

    def _echo(self, message: str) -> None:
        self._console.print(message, end="")
