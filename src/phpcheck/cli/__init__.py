"""CLI utilities for phpcheck.

This package holds the terminal side of phpcheck: exit codes, colour
detection and the requirements report.
"""

from __future__ import annotations

from phpcheck.cli.context import CLIContext, ExitCode
from phpcheck.cli.report import Reporter, error_message, exit_code_for, wordwrap
from phpcheck.cli.terminal import ColorSupport, detect_color_support, make_console

__all__ = [
    "CLIContext",
    "ColorSupport",
    "ExitCode",
    "Reporter",
    "detect_color_support",
    "error_message",
    "exit_code_for",
    "make_console",
    "wordwrap",
]
