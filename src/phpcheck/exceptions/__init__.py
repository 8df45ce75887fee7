"""phpcheck exception hierarchy.

All exceptions can be imported from this package:
    from phpcheck.exceptions import ConfigError, RuntimeProbeError
"""

from __future__ import annotations

# Base exception
from phpcheck.exceptions.base import PhpCheckError

# Configuration exceptions
from phpcheck.exceptions.config import ConfigError

# Runtime probe exceptions
from phpcheck.exceptions.probe import RuntimeProbeError

# Requirement declaration exceptions
from phpcheck.exceptions.requirements import InvalidRequirementError

__all__ = [
    "PhpCheckError",
    "ConfigError",
    "InvalidRequirementError",
    "RuntimeProbeError",
]
