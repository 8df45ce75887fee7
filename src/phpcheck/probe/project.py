"""Project probe: composer layout, framework version and directory access."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from phpcheck.constants import DEFAULT_PROJECT_OPTIONS
from phpcheck.logging import get_logger

__all__ = [
    "ProjectInfo",
    "looks_like_project",
    "find_composer_root",
    "read_composer_options",
    "detect_framework_version",
    "load_project",
]

logger = get_logger(__name__)

#: Location of the Symfony kernel relative to the checked directory.
KERNEL_PATH = Path("vendor/symfony/http-kernel/Kernel.php")

_KERNEL_VERSION_PATTERN = re.compile(r"const VERSION +=\s+'([^']+)'")


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    """What the project checks need to know about a project directory.

    Attributes:
        directory: The directory that was asked to be checked.
        root: Composer root (closest parent holding composer.json).
        options: Composer layout options (vendor-dir, var-dir, ...).
        framework_version: Symfony version from the installed kernel, if any.
    """

    directory: Path
    root: Path
    options: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PROJECT_OPTIONS)
    )
    framework_version: str | None = None

    def path(self, option: str, *parts: str) -> Path:
        """Resolve a layout option (plus sub-paths) against the root."""
        return self.root.joinpath(self.options[option], *parts)

    def is_dir(self, option: str, *parts: str) -> bool:
        return self.path(option, *parts).is_dir()

    def is_writable(self, option: str, *parts: str) -> bool:
        return os.access(self.path(option, *parts), os.W_OK)


def looks_like_project(directory: Path) -> bool:
    """Whether a directory is a composer project root."""
    return (directory / "composer.json").is_file()


def find_composer_root(directory: Path) -> Path:
    """Walk up from a directory to the closest one holding composer.json.

    Returns the directory itself when no parent holds a composer.json.
    """
    current = directory
    while not (current / "composer.json").exists():
        if current.parent == current:
            return directory
        current = current.parent
    return current


def read_composer_options(root: Path) -> dict[str, str]:
    """Read the directory layout declared in composer.json.

    Each option is looked up in ``extra.<option>``, then
    ``extra.symfony-<option>``, then ``config.<option>``. Options that are
    not declared keep their defaults, and an unreadable composer.json yields
    the defaults.
    """
    options = dict(DEFAULT_PROJECT_OPTIONS)
    composer_file = root / "composer.json"

    try:
        composer: Any = json.loads(composer_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("composer_json_missing", root=str(root))
        return options
    except (OSError, ValueError) as e:
        logger.warning(
            "composer_json_unreadable", path=str(composer_file), error=str(e)
        )
        return options

    if not isinstance(composer, dict):
        logger.warning("composer_json_unexpected", path=str(composer_file))
        return options

    extra = composer.get("extra")
    extra = extra if isinstance(extra, dict) else {}
    config = composer.get("config")
    config = config if isinstance(config, dict) else {}

    for key in options:
        for section, name in ((extra, key), (extra, f"symfony-{key}"), (config, key)):
            value = section.get(name)
            if isinstance(value, str) and value:
                options[key] = value
                break

    return options


def detect_framework_version(directory: Path) -> str | None:
    """Read the Symfony version from the installed HttpKernel, if present."""
    kernel = directory / KERNEL_PATH
    try:
        contents = kernel.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    match = _KERNEL_VERSION_PATTERN.search(contents)
    return match.group(1) if match else None


def load_project(directory: Path) -> ProjectInfo:
    """Gather everything the project checks need about a directory."""
    directory = directory.resolve()
    root = find_composer_root(directory)
    project = ProjectInfo(
        directory=directory,
        root=root,
        options=read_composer_options(root),
        framework_version=detect_framework_version(directory),
    )
    logger.info(
        "project_loaded",
        directory=str(directory),
        root=str(root),
        framework_version=project.framework_version,
    )
    return project
