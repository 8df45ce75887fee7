"""Requirements a Symfony project puts on the PHP runtime and its directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpcheck.logging import get_logger
from phpcheck.requirements.collection import RequirementCollection
from phpcheck.requirements.versions import (
    select_required_php_version,
    version_at_least,
)

if TYPE_CHECKING:
    from phpcheck.probe.project import ProjectInfo
    from phpcheck.probe.runtime import RuntimeSnapshot

__all__ = ["project_requirements"]

logger = get_logger(__name__)


def project_requirements(
    php: RuntimeSnapshot, project: ProjectInfo
) -> RequirementCollection:
    """Build the mandatory requirements of a project.

    The minimum PHP version follows the Symfony version installed in the
    project; an unknown Symfony version requires the newest band.

    Args:
        php: Facts reported by the runtime probe.
        project: Layout and framework version of the project.

    Returns:
        Collection of mandatory requirements.
    """
    reqs = RequirementCollection(config=php)

    required_version = select_required_php_version(project.framework_version)
    version_ok = version_at_least(php.version, required_version)
    logger.debug(
        "php_version_band_selected",
        framework_version=project.framework_version,
        required=required_version,
        installed=php.version,
    )

    reqs.add_requirement(
        version_ok,
        f"PHP version must be at least {required_version} ({php.version} installed)",
        f'You are running PHP version "<strong>{php.version}</strong>", but Symfony '
        f'needs at least PHP "<strong>{required_version}</strong>" to run. '
        "Before using Symfony, upgrade your PHP installation, preferably to the "
        "latest version.",
        f"Install PHP {required_version} or newer "
        f"(installed version is {php.version})",
    )

    if version_ok:
        reqs.add_requirement(
            php.timezone_supported,
            f'Configured default timezone "{php.timezone}" must be supported by '
            "your installation of PHP",
            "Your default timezone is not supported by PHP. Check for typos in your "
            "<strong>php.ini</strong> file and have a look at the list of deprecated "
            'timezones at <a href="http://php.net/manual/en/timezones.others.php">'
            "http://php.net/manual/en/timezones.others.php</a>.",
        )

    reqs.add_requirement(
        project.is_dir("vendor-dir", "composer"),
        "Vendor libraries must be installed",
        "Vendor libraries are missing. Install composer following instructions "
        'from <a href="http://getcomposer.org/">http://getcomposer.org/</a>. '
        'Then run "<strong>php composer.phar install</strong>" to install them.',
    )

    var_dir = project.options["var-dir"]
    for subdir in ("cache", "log"):
        if project.is_dir("var-dir", subdir):
            reqs.add_requirement(
                project.is_writable("var-dir", subdir),
                f"{var_dir}/{subdir}/ directory must be writable",
                f'Change the permissions of "<strong>{var_dir}/{subdir}/</strong>" '
                "directory so that the web server can write into it.",
            )

    return reqs
