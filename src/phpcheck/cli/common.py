from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from phpcheck.cli.context import ExitCode
from phpcheck.cli.output import format_error
from phpcheck.exceptions import ConfigError, PhpCheckError, RuntimeProbeError
from phpcheck.logging import get_logger


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for CLI error handling.

    - KeyboardInterrupt: exit with code 130
    - ConfigError: error with the offending field and value
    - RuntimeProbeError: error with a hint on selecting the PHP binary
    - PhpCheckError: error with its message
    - anything else: logged, then reported as an error

    Example:
        >>> with cli_error_handler():
        ...     snapshot = probe_runtime(config.php_binary)
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details or None), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except RuntimeProbeError as e:
        click.echo(
            format_error(
                e.message,
                suggestion="Use --php or PHPCHECK_PHP_BINARY to select the PHP "
                "executable to check.",
            ),
            err=True,
        )
        raise SystemExit(ExitCode.FAILURE) from e
    except PhpCheckError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except Exception as e:
        logger.exception("unexpected_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e
