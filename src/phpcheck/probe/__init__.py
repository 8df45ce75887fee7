"""Collaborators that gather raw facts about the PHP runtime and a project.

The requirement sets only evaluate what these probes report; all subprocess
and filesystem access lives here.
"""

from __future__ import annotations

from phpcheck.probe.project import (
    ProjectInfo,
    detect_framework_version,
    find_composer_root,
    load_project,
    looks_like_project,
    read_composer_options,
)
from phpcheck.probe.runtime import RuntimeSnapshot, probe_runtime

__all__ = [
    "ProjectInfo",
    "RuntimeSnapshot",
    "detect_framework_version",
    "find_composer_root",
    "load_project",
    "looks_like_project",
    "probe_runtime",
    "read_composer_options",
]
