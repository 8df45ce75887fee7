"""Constants shared across phpcheck.

Requirement bands, probe lists and rendering defaults live here so the
requirement sets and the reporter agree on them.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# PHP version bands
# =============================================================================

REQUIRED_PHP_VERSION_3X: Final = "5.5.9"
REQUIRED_PHP_VERSION_4X: Final = "7.1.3"
REQUIRED_PHP_VERSION_5X: Final = "7.2.9"
REQUIRED_PHP_VERSION_6X: Final = "8.1.0"
REQUIRED_PHP_VERSION_7X: Final = "8.2.0"

#: Minimum PHP version used when the Symfony version is unknown or predates
#: every band.
DEFAULT_REQUIRED_PHP_VERSION: Final = REQUIRED_PHP_VERSION_7X

#: (Symfony version threshold, required PHP version), highest threshold first.
SYMFONY_PHP_BANDS: Final[tuple[tuple[str, str], ...]] = (
    ("7.0.0", REQUIRED_PHP_VERSION_7X),
    ("6.0.0", REQUIRED_PHP_VERSION_6X),
    ("5.0.0", REQUIRED_PHP_VERSION_5X),
    ("4.0.0", REQUIRED_PHP_VERSION_4X),
    ("3.0.0", REQUIRED_PHP_VERSION_3X),
)

# =============================================================================
# Runtime probe
# =============================================================================

#: Functions whose presence is reported by the probe script.
PROBED_FUNCTIONS: Final[tuple[str, ...]] = (
    "iconv",
    "json_encode",
    "session_start",
    "ctype_alpha",
    "token_get_all",
    "simplexml_import_dom",
    "apc_store",
    "mb_strlen",
    "utf8_decode",
    "filter_var",
    "posix_isatty",
)

#: Classes whose presence is reported by the probe script.
PROBED_CLASSES: Final[tuple[str, ...]] = (
    "DomDocument",
    "PDO",
    "Collator",
)

#: Constants whose values are reported by the probe script.
PROBED_CONSTANTS: Final[tuple[str, ...]] = (
    "PCRE_VERSION",
    "INTL_ICU_VERSION",
)

DEFAULT_PHP_BINARY: Final = "php"
DEFAULT_PROBE_TIMEOUT: Final = 10.0

# =============================================================================
# Project layout
# =============================================================================

#: Composer layout options and their defaults.
DEFAULT_PROJECT_OPTIONS: Final[dict[str, str]] = {
    "bin-dir": "bin",
    "conf-dir": "conf",
    "etc-dir": "etc",
    "src-dir": "src",
    "var-dir": "var",
    "public-dir": "public",
    "vendor-dir": "vendor",
}

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_LINE_WIDTH: Final = 70
