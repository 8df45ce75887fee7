"""Version comparison and PHP version band selection."""

from __future__ import annotations

import re
from collections.abc import Sequence

from packaging.version import InvalidVersion, Version

from phpcheck.constants import DEFAULT_REQUIRED_PHP_VERSION, SYMFONY_PHP_BANDS

__all__ = [
    "parse_version",
    "version_at_least",
    "select_required_php_version",
]

# Distribution builds append suffixes ("8.1.2-1ubuntu2.14", "7.4.33-nmm4")
# that take no part in comparisons. Pre-release tags ("8.2.0RC1", "6.4.1-DEV")
# do, and order dev < alpha < beta < RC < release.
_VERSION_PREFIX = re.compile(
    r"^\s*v?(\d+(?:\.\d+)*)"
    r"(?:[-_.]?(alpha|beta|rc|a|b|dev)[-_.]?(\d*)(?![a-z]))?",
    re.IGNORECASE,
)

_PRE_RELEASE_TAGS = {
    "alpha": "a",
    "a": "a",
    "beta": "b",
    "b": "b",
    "rc": "rc",
    "dev": ".dev",
}


def parse_version(version: str | None) -> Version | None:
    """Parse the numeric part of a version string and its pre-release tag.

    Args:
        version: Version string such as "8.3.4", "6.4.1-DEV" or
            "7.4.3-4ubuntu2.19".

    Returns:
        The parsed Version, or None when the string has no leading number.

    Example:
        >>> parse_version("8.1.2-1ubuntu2.14")
        <Version('8.1.2')>
        >>> parse_version("8.2.0RC1")
        <Version('8.2.0rc1')>
        >>> parse_version("unknown") is None
        True
    """
    if not version:
        return None
    match = _VERSION_PREFIX.match(version)
    if match is None:
        return None
    release, tag, number = match.groups()
    if tag:
        release += f"{_PRE_RELEASE_TAGS[tag.lower()]}{number or 0}"
    try:
        return Version(release)
    except InvalidVersion:
        return None


def version_at_least(installed: str | None, required: str) -> bool:
    """Whether an installed version meets a minimum version.

    An installed version that cannot be parsed never meets the minimum.
    """
    installed_version = parse_version(installed)
    required_version = parse_version(required)
    if installed_version is None or required_version is None:
        return False
    return installed_version >= required_version


def select_required_php_version(
    framework_version: str | None,
    bands: Sequence[tuple[str, str]] = SYMFONY_PHP_BANDS,
    default: str = DEFAULT_REQUIRED_PHP_VERSION,
) -> str:
    """Select the minimum PHP version for a framework version.

    Args:
        framework_version: Detected framework version, None when unknown.
        bands: (threshold, required PHP version) pairs, highest threshold
            first. The first threshold met wins.
        default: Version returned when no threshold is met or the framework
            version is unknown.

    Returns:
        The required PHP version.

    Example:
        >>> bands = [("6.0.0", "8.1.0"), ("5.0.0", "7.2.9")]
        >>> select_required_php_version("6.2.0", bands)
        '8.1.0'
        >>> select_required_php_version(None)
        '8.2.0'
    """
    if parse_version(framework_version) is None:
        return default
    for threshold, php_version in bands:
        if version_at_least(framework_version, threshold):
            return php_version
    return default
