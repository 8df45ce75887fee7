"""Requirement model and the requirement sets evaluated by phpcheck.

Example:
    from phpcheck.requirements import RequirementCollection, runtime_requirements

    reqs = RequirementCollection()
    reqs.add_collection(runtime_requirements(snapshot))
    failed = reqs.get_failed_requirements()
"""

from __future__ import annotations

from phpcheck.requirements.collection import RequirementCollection
from phpcheck.requirements.models import (
    ABSENT,
    ConfigSource,
    Evaluation,
    FixedBoolean,
    IniValue,
    Predicate,
    Requirement,
    config_requirement,
    ini_int,
    loose_bool,
    strip_tags,
)
from phpcheck.requirements.project import project_requirements
from phpcheck.requirements.runtime import runtime_requirements
from phpcheck.requirements.sizes import convert_shorthand_size, exceeds
from phpcheck.requirements.versions import (
    parse_version,
    select_required_php_version,
    version_at_least,
)

__all__ = [
    "ABSENT",
    "ConfigSource",
    "Evaluation",
    "FixedBoolean",
    "IniValue",
    "Predicate",
    "Requirement",
    "RequirementCollection",
    "config_requirement",
    "convert_shorthand_size",
    "exceeds",
    "ini_int",
    "loose_bool",
    "parse_version",
    "project_requirements",
    "runtime_requirements",
    "select_required_php_version",
    "strip_tags",
    "version_at_least",
]
