"""CLI context and exit codes for phpcheck."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from phpcheck.config import PhpCheckConfig

__all__ = [
    "ExitCode",
    "CLIContext",
]


class ExitCode(IntEnum):
    """Exit codes for the phpcheck CLI.

    - 0: every mandatory requirement is met
    - 1: a mandatory requirement failed, or the check could not run
    - 130: keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Options of a single phpcheck invocation.

    Attributes:
        config: Loaded phpcheck configuration.
        project_dir: Project directory to check, None for runtime checks only.
        verbose: Print one line per check instead of progress glyphs.
    """

    config: PhpCheckConfig
    project_dir: Path | None = None
    verbose: bool = False
