"""Requirements and recommendations for running Symfony on a PHP runtime.

runtime_requirements() evaluates a RuntimeSnapshot. Checks on an extension's
settings are only registered when that extension is loaded; a missing
optional extension is not a failure unless a dedicated check says so.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from phpcheck.logging import get_logger
from phpcheck.requirements.collection import RequirementCollection
from phpcheck.requirements.models import IniValue, ini_int, loose_bool
from phpcheck.requirements.sizes import convert_shorthand_size, exceeds
from phpcheck.requirements.versions import version_at_least

if TYPE_CHECKING:
    from phpcheck.probe.runtime import RuntimeSnapshot

__all__ = ["runtime_requirements"]

logger = get_logger(__name__)

_LEADING_FLOAT = re.compile(r"\s*(\d+(?:\.\d+)?)")

#: (extension, ini option enabling it) pairs that count as an opcode cache.
ACCELERATORS: tuple[tuple[str, str], ...] = (
    ("eaccelerator", "eaccelerator.enable"),
    ("apc", "apc.enabled"),
    ("Zend Optimizer+", "zend_optimizerplus.enable"),
    ("Zend OPcache", "opcache.enable"),
    ("xcache", "xcache.cacher"),
    ("wincache", "wincache.ocenabled"),
)

REALPATH_CACHE_MINIMUM = 5 * 1024 * 1024


def _leading_float(value: str | None) -> float | None:
    if value is None:
        return None
    match = _LEADING_FLOAT.match(value)
    return float(match.group(1)) if match else 0.0


def _max_nesting_above_100(value: IniValue) -> bool:
    return ini_int(value) > 100


def _is_zero(value: IniValue) -> bool:
    return ini_int(value) == 0


def runtime_requirements(php: RuntimeSnapshot) -> RequirementCollection:
    """Build the runtime requirement set for a PHP installation.

    Args:
        php: Facts reported by the runtime probe.

    Returns:
        Collection with mandatory requirements followed by recommendations.
    """
    reqs = RequirementCollection(config=php)

    if not version_at_least(php.version, "7.0.0"):
        reqs.add_config_requirement(
            "date.timezone",
            True,
            False,
            "date.timezone setting must be set",
            'Set the "<strong>date.timezone</strong>" setting in '
            'php.ini<a href="#phpini">*</a> (like Europe/Paris).',
        )

    for function, extension in (
        ("iconv", "iconv"),
        ("json_encode", "JSON"),
        ("session_start", "session"),
        ("ctype_alpha", "ctype"),
        ("token_get_all", "Tokenizer"),
        ("simplexml_import_dom", "SimpleXML"),
    ):
        reqs.add_requirement(
            php.function_exists(function),
            f"{function}() must be available",
            f"Install and enable the <strong>{extension}</strong> extension.",
        )

    if php.function_exists("apc_store") and loose_bool(php.ini_get("apc.enabled")):
        apc_minimum = "3.1.13" if version_at_least(php.version, "5.4.0") else "3.0.17"
        suffix = " when using PHP 5.4" if apc_minimum == "3.1.13" else ""
        reqs.add_requirement(
            version_at_least(php.extension_version("apc"), apc_minimum),
            f"APC version must be at least {apc_minimum}{suffix}",
            f"Upgrade your <strong>APC</strong> extension ({apc_minimum}+).",
        )

    reqs.add_config_requirement("detect_unicode", False)

    if php.extension_loaded("suhosin"):
        reqs.add_config_requirement(
            "suhosin.executor.include.whitelist",
            lambda value: value is not False and "phar" in value.lower(),
            False,
            "suhosin.executor.include.whitelist must be configured correctly in "
            "php.ini",
            'Add "<strong>phar</strong>" to '
            "<strong>suhosin.executor.include.whitelist</strong> in "
            'php.ini<a href="#phpini">*</a>.',
        )

    if php.extension_loaded("xdebug"):
        reqs.add_config_requirement("xdebug.show_exception_trace", False, True)
        reqs.add_config_requirement("xdebug.scream", False, True)

    pcre_version = _leading_float(php.constant("PCRE_VERSION"))

    reqs.add_requirement(
        pcre_version is not None,
        "PCRE extension must be available",
        "Install the <strong>PCRE</strong> extension (version 8.0+).",
    )

    if php.extension_loaded("mbstring"):
        reqs.add_config_requirement(
            "mbstring.func_overload",
            _is_zero,
            True,
            "string functions should not be overloaded",
            'Set "<strong>mbstring.func_overload</strong>" to <strong>0</strong> in '
            'php.ini<a href="#phpini">*</a> to disable function overloading by '
            "the mbstring extension.",
        )

    # optional recommendations follow

    if pcre_version is not None:
        reqs.add_recommendation(
            pcre_version >= 8.0,
            "PCRE extension should be at least version 8.0 "
            f"({pcre_version:g} installed)",
            "<strong>PCRE 8.0+</strong> is preconfigured in PHP since 5.3.2 but you "
            "are using an outdated version of it. Symfony probably works anyway but "
            "it is recommended to upgrade your PCRE extension.",
        )

    reqs.add_recommendation(
        php.class_exists("DomDocument"),
        "PHP-DOM and PHP-XML modules should be installed",
        "Install and enable the <strong>PHP-DOM</strong> and the "
        "<strong>PHP-XML</strong> modules.",
    )

    for function, extension in (
        ("mb_strlen", "mbstring"),
        ("utf8_decode", "XML"),
        ("filter_var", "filter"),
    ):
        reqs.add_recommendation(
            php.function_exists(function),
            f"{function}() should be available",
            f"Install and enable the <strong>{extension}</strong> extension.",
        )

    if not php.windows:
        reqs.add_recommendation(
            php.function_exists("posix_isatty"),
            "posix_isatty() should be available",
            "Install and enable the <strong>php_posix</strong> extension "
            "(used to colorize the CLI output).",
        )

    reqs.add_recommendation(
        php.extension_loaded("intl"),
        "intl extension should be available",
        "Install and enable the <strong>intl</strong> extension (used for validators).",
    )

    if php.extension_loaded("intl"):
        # some WAMP installations return null from new Collator()
        reqs.add_recommendation(
            php.collator_works is not False,
            "intl extension should be correctly configured",
            "The intl extension does not behave properly. This problem is typical "
            "on PHP 5.3.X x64 WIN builds.",
        )

        icu_version = php.constant("INTL_ICU_VERSION")
        if icu_version is not None:
            reqs.add_recommendation(
                version_at_least(icu_version, "4.0"),
                "intl ICU version should be at least 4+",
                "Upgrade your <strong>intl</strong> extension with a newer ICU "
                "version (4+).",
            )

        reqs.add_config_recommendation(
            "intl.error_level",
            _is_zero,
            True,
            "intl.error_level should be 0 in php.ini",
            'Set "<strong>intl.error_level</strong>" to "<strong>0</strong>" in '
            'php.ini<a href="#phpini">*</a> to inhibit the messages when an error '
            "occurs in ICU functions.",
        )

    accelerator = any(
        php.extension_loaded(extension) and loose_bool(php.ini_get(option))
        for extension, option in ACCELERATORS
    )
    reqs.add_recommendation(
        accelerator,
        "a PHP accelerator should be installed",
        "Install and/or enable a <strong>PHP accelerator</strong> "
        "(highly recommended).",
    )

    if php.windows:
        reqs.add_recommendation(
            convert_shorthand_size(php.ini_get("realpath_cache_size"))
            >= REALPATH_CACHE_MINIMUM,
            "realpath_cache_size should be at least 5M in php.ini",
            'Setting "<strong>realpath_cache_size</strong>" to e.g. '
            '"<strong>5242880</strong>" or "<strong>5M</strong>" in '
            'php.ini<a href="#phpini">*</a> may improve performance on Windows '
            "significantly in some cases.",
        )

    reqs.add_config_recommendation("short_open_tag", False)
    reqs.add_config_recommendation("magic_quotes_gpc", False, True)
    reqs.add_config_recommendation("register_globals", False, True)
    reqs.add_config_recommendation("session.auto_start", False)

    reqs.add_config_recommendation(
        "xdebug.max_nesting_level",
        _max_nesting_above_100,
        True,
        "xdebug.max_nesting_level should be above 100 in php.ini",
        'Set "<strong>xdebug.max_nesting_level</strong>" to e.g. '
        '"<strong>250</strong>" in php.ini<a href="#phpini">*</a> to stop '
        "Xdebug's infinite recursion protection erroneously throwing a fatal "
        "error in your project.",
    )

    memory_limit = convert_shorthand_size(php.ini_get("memory_limit"))
    post_max_size = convert_shorthand_size(php.ini_get("post_max_size"), "0")
    upload_max_filesize = convert_shorthand_size(
        php.ini_get("upload_max_filesize"), "0"
    )

    reqs.add_config_recommendation(
        "post_max_size",
        lambda _value: exceeds(memory_limit, post_max_size),
        True,
        '"memory_limit" should be greater than "post_max_size".',
        'Set "<strong>memory_limit</strong>" to be greater than '
        '"<strong>post_max_size</strong>".',
    )

    reqs.add_config_recommendation(
        "upload_max_filesize",
        lambda _value: exceeds(post_max_size, upload_max_filesize),
        True,
        '"post_max_size" should be greater than "upload_max_filesize".',
        'Set "<strong>post_max_size</strong>" to be greater than '
        '"<strong>upload_max_filesize</strong>".',
    )

    reqs.add_recommendation(
        php.class_exists("PDO"),
        "PDO should be installed",
        "Install <strong>PDO</strong> (mandatory for Doctrine).",
    )

    if php.class_exists("PDO"):
        drivers = ", ".join(php.pdo_drivers) or "none"
        reqs.add_recommendation(
            len(php.pdo_drivers) > 0,
            f"PDO should have some drivers installed (currently available: {drivers})",
            "Install <strong>PDO drivers</strong> (mandatory for Doctrine).",
        )

    logger.debug(
        "runtime_requirements_built",
        requirements=len(reqs.get_requirements()),
        recommendations=len(reqs.get_recommendations()),
    )
    return reqs
