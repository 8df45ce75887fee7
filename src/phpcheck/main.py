"""CLI entry point for phpcheck.

This module defines the Click-based command-line interface. It loads the
configuration, probes the PHP runtime, evaluates the runtime (and, when a
project directory is known, project) requirements and prints the report.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

import click

from phpcheck import __version__
from phpcheck.cli.common import cli_error_handler
from phpcheck.cli.context import CLIContext, ExitCode
from phpcheck.cli.report import Reporter
from phpcheck.cli.terminal import detect_color_support, make_console
from phpcheck.config import PhpCheckConfig, load_config
from phpcheck.logging import LOG_LEVEL_ENV_VAR, configure_logging, get_logger
from phpcheck.probe import load_project, looks_like_project, probe_runtime
from phpcheck.requirements import (
    RequirementCollection,
    project_requirements,
    runtime_requirements,
)

VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _log_level(config: PhpCheckConfig) -> int | None:
    # PHPCHECK_LOG_LEVEL wins over the configured verbosity; -v never changes
    # the log level.
    if LOG_LEVEL_ENV_VAR in os.environ:
        return None
    return VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)


def resolve_project_dir(directory: Path | None) -> Path | None:
    """Directory whose project requirements are checked, if any.

    An explicit directory always wins; otherwise the current directory is
    used when it holds a composer.json.
    """
    if directory is not None:
        return directory
    cwd = Path.cwd()
    return cwd if looks_like_project(cwd) else None


def use_color(config: PhpCheckConfig) -> bool:
    if config.color == "always":
        return True
    if config.color == "never":
        return False
    return detect_color_support().supported


def run_check(cli_ctx: CLIContext, stream: TextIO) -> ExitCode:
    """Probe, evaluate and report.

    Args:
        cli_ctx: Options of this invocation.
        stream: Where the report is written.

    Returns:
        ExitCode.SUCCESS when every mandatory requirement is met.
    """
    config = cli_ctx.config
    php = probe_runtime(config.php_binary, timeout=config.probe_timeout)

    requirements = RequirementCollection()
    requirements.add_collection(runtime_requirements(php))
    if cli_ctx.project_dir is not None:
        project = load_project(cli_ctx.project_dir)
        requirements.add_collection(project_requirements(php, project))

    reporter = Reporter(
        make_console(stream, use_color(config)),
        verbose=cli_ctx.verbose,
        line_width=config.line_width,
    )
    return reporter.render(requirements, ini_file=php.ini_file)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="phpcheck")
@click.argument(
    "directory",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to config file (overrides ./phpcheck.yaml).",
)
@click.option(
    "--php",
    "php_binary",
    type=str,
    default=None,
    help="PHP executable to check (default: php on PATH).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Show one line per check instead of progress glyphs.",
)
def cli(
    directory: Path | None,
    config_file: Path | None,
    php_binary: str | None,
    verbose: int,
) -> None:
    """Check that PHP is ready to run Symfony projects.

    Runtime requirements are always checked. Project requirements are checked
    for DIRECTORY, or for the current directory when it contains a
    composer.json.

    Examples:

        phpcheck

        phpcheck -v path/to/project

        phpcheck --php /usr/bin/php8.3
    """
    overrides = {"php_binary": php_binary} if php_binary else {}
    with cli_error_handler():
        config = load_config(config_file, **overrides)

    configure_logging(level=_log_level(config))
    logger = get_logger(__name__)

    cli_ctx = CLIContext(
        config=config,
        project_dir=resolve_project_dir(directory),
        verbose=verbose > 0,
    )
    logger.debug(
        "check_started",
        php_binary=config.php_binary,
        project_dir=str(cli_ctx.project_dir) if cli_ctx.project_dir else None,
    )

    with cli_error_handler():
        exit_code = run_check(cli_ctx, sys.stdout)

    raise SystemExit(exit_code)


if __name__ == "__main__":
    cli()
