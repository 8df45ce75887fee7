"""PHP runtime probe.

Runs the bundled probe.php script once through the PHP CLI and exposes the
reported facts (ini values, loaded extensions, available functions and
classes, ...) as an immutable RuntimeSnapshot.
"""

from __future__ import annotations

import subprocess
from importlib.resources import files

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from phpcheck.constants import (
    DEFAULT_PHP_BINARY,
    DEFAULT_PROBE_TIMEOUT,
    PROBED_CLASSES,
    PROBED_CONSTANTS,
    PROBED_FUNCTIONS,
)
from phpcheck.exceptions import RuntimeProbeError
from phpcheck.logging import get_logger
from phpcheck.requirements.models import ABSENT, IniValue

__all__ = ["RuntimeSnapshot", "probe_runtime", "load_probe_script"]

logger = get_logger(__name__)

#: Line probe.php prints right before the JSON snapshot.
SNAPSHOT_MARKER = "--- phpcheck snapshot ---"

# Keep diagnostics off stdout so they cannot corrupt the snapshot.
PHP_FLAGS = ("-d", "display_errors=stderr", "-d", "display_startup_errors=0")


class RuntimeSnapshot(BaseModel):
    """Facts reported by the PHP runtime at probe time.

    Attributes:
        version: PHP_VERSION of the probed binary.
        os: PHP_OS of the probed binary.
        windows: Whether PHP runs on Windows.
        ini_file: Loaded php.ini path, None when PHP uses no php.ini.
        ini: Current value of every existing php.ini option.
        extensions: Loaded extensions (lower-cased) and their versions.
        functions: Probed functions that exist.
        classes: Probed classes that exist.
        constants: Probed constants that are defined, as strings.
        timezone: The default timezone.
        timezone_supported: Whether the timezone is a known identifier.
        pdo_drivers: Available PDO drivers.
        collator_works: Whether a Collator can be created; None without intl.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    os: str = ""
    windows: bool = False
    ini_file: str | None = None
    ini: dict[str, str] = Field(default_factory=dict)
    extensions: dict[str, str | None] = Field(default_factory=dict)
    functions: frozenset[str] = frozenset()
    classes: frozenset[str] = frozenset()
    constants: dict[str, str] = Field(default_factory=dict)
    timezone: str = "UTC"
    timezone_supported: bool = True
    pdo_drivers: tuple[str, ...] = ()
    collator_works: bool | None = None

    def ini_get(self, name: str) -> IniValue:
        """Return an option value, or ABSENT when the option does not exist."""
        return self.ini.get(name, ABSENT)

    def extension_loaded(self, name: str) -> bool:
        return name.lower() in self.extensions

    def extension_version(self, name: str) -> str | None:
        return self.extensions.get(name.lower())

    def function_exists(self, name: str) -> bool:
        return name.lower() in {f.lower() for f in self.functions}

    def class_exists(self, name: str) -> bool:
        return name.lower() in {c.lower() for c in self.classes}

    def constant(self, name: str) -> str | None:
        return self.constants.get(name)


def load_probe_script() -> str:
    """Return the source of the bundled probe script."""
    return files("phpcheck.probe").joinpath("probe.php").read_text(encoding="utf-8")


def _snapshot_document(stdout: str) -> str:
    """Isolate the JSON snapshot from anything else PHP printed on stdout."""
    _, marker, document = stdout.rpartition(SNAPSHOT_MARKER)
    if not marker:
        document = stdout
    for line in document.splitlines():
        if line.lstrip().startswith("{"):
            return line
    return document


def probe_runtime(
    php_binary: str = DEFAULT_PHP_BINARY,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> RuntimeSnapshot:
    """Inspect a PHP runtime.

    The probe script is passed on stdin so that nothing has to be written to
    disk. PHP diagnostics go to stderr, and any other text printed before the
    snapshot marker is logged and ignored.

    Args:
        php_binary: PHP executable to run.
        timeout: Maximum seconds to wait for the probe.

    Returns:
        RuntimeSnapshot describing the runtime.

    Raises:
        RuntimeProbeError: If PHP cannot be started, fails, times out or
            prints something that is not a valid snapshot.
    """
    command = [
        php_binary,
        *PHP_FLAGS,
        "--",
        ",".join(PROBED_FUNCTIONS),
        ",".join(PROBED_CLASSES),
        ",".join(PROBED_CONSTANTS),
    ]
    logger.debug("runtime_probe_started", binary=php_binary, timeout=timeout)

    try:
        result = subprocess.run(
            command,
            input=load_probe_script(),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise RuntimeProbeError(
            f"PHP executable not found: {php_binary}", binary=php_binary
        ) from e
    except PermissionError as e:
        raise RuntimeProbeError(
            f"Permission denied running {php_binary}", binary=php_binary
        ) from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeProbeError(
            f"PHP probe timed out after {timeout:g}s", binary=php_binary
        ) from e

    if result.returncode != 0:
        raise RuntimeProbeError(
            f"PHP probe failed with exit code {result.returncode}: "
            f"{result.stderr.strip() or result.stdout.strip() or 'no output'}",
            binary=php_binary,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    document = _snapshot_document(result.stdout)
    extra = result.stdout.replace(document, "").replace(SNAPSHOT_MARKER, "").strip()
    if extra:
        logger.warning("runtime_probe_extra_output", binary=php_binary, output=extra)

    try:
        snapshot = RuntimeSnapshot.model_validate_json(document)
    except ValidationError as e:
        raise RuntimeProbeError(
            f"Unexpected output from the PHP probe: {e.error_count()} invalid field(s)",
            binary=php_binary,
            returncode=result.returncode,
            stderr=result.stderr,
        ) from e

    logger.info(
        "runtime_probed",
        binary=php_binary,
        php_version=snapshot.version,
        ini_file=snapshot.ini_file,
        extensions=len(snapshot.extensions),
    )
    return snapshot
