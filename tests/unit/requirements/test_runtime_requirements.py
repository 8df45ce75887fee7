"""Unit tests for the runtime requirement set."""

from __future__ import annotations

import pytest

from phpcheck.probe.runtime import RuntimeSnapshot
from phpcheck.requirements import RequirementCollection, runtime_requirements
from tests.fixtures.runtime import SnapshotFactory


def find(reqs: RequirementCollection, prefix: str):
    """Return the single requirement whose test message starts with prefix."""
    matches = [req for req in reqs.all() if req.get_test_message().startswith(prefix)]
    assert len(matches) == 1, f"expected one check starting with {prefix!r}"
    return matches[0]


def failed_messages(reqs: RequirementCollection) -> list[str]:
    return [
        req.get_test_message()
        for req in reqs.get_failed_requirements() + reqs.get_failed_recommendations()
    ]


# =============================================================================
# Healthy runtime
# =============================================================================


class TestHealthyRuntime:
    """A runtime meeting everything yields no failures."""

    def test_nothing_fails(self, healthy_snapshot: RuntimeSnapshot) -> None:
        reqs = runtime_requirements(healthy_snapshot)

        assert failed_messages(reqs) == []

    def test_check_counts(self, healthy_snapshot: RuntimeSnapshot) -> None:
        reqs = runtime_requirements(healthy_snapshot)

        assert len(reqs.get_requirements()) == 9
        assert len(reqs.get_recommendations()) == 20

    def test_requirements_come_before_recommendations(
        self, healthy_snapshot: RuntimeSnapshot
    ) -> None:
        flags = [req.is_optional() for req in runtime_requirements(healthy_snapshot)]

        assert flags == sorted(flags)


# =============================================================================
# Mandatory requirements
# =============================================================================


class TestMandatoryRequirements:
    """Failures of mandatory runtime checks."""

    @pytest.mark.parametrize(
        ("function", "extension"),
        [
            ("iconv", "iconv"),
            ("json_encode", "JSON"),
            ("session_start", "session"),
            ("ctype_alpha", "ctype"),
            ("token_get_all", "Tokenizer"),
            ("simplexml_import_dom", "SimpleXML"),
        ],
    )
    def test_missing_required_function(
        self, make_snapshot: SnapshotFactory, function: str, extension: str
    ) -> None:
        reqs = runtime_requirements(make_snapshot(remove_functions=(function,)))

        (req,) = reqs.get_failed_requirements()
        assert req.get_test_message() == f"{function}() must be available"
        assert req.get_help_text() == f"Install and enable the {extension} extension."

    def test_date_timezone_checked_before_php_7(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        reqs = runtime_requirements(
            make_snapshot(version="5.6.40", remove_ini=("date.timezone",))
        )

        req = find(reqs, "date.timezone setting must be set")
        assert req.is_fulfilled() is False
        assert req.is_optional() is False

    def test_date_timezone_not_checked_since_php_7(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        reqs = runtime_requirements(make_snapshot(remove_ini=("date.timezone",)))

        assert not any(
            req.get_test_message().startswith("date.timezone") for req in reqs
        )

    def test_detect_unicode_enabled(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(ini_update={"detect_unicode": "1"}))

        assert failed_messages(reqs) == ["detect_unicode must be disabled in php.ini"]

    def test_missing_pcre(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(constants={"INTL_ICU_VERSION": "74.1"}))

        req = find(reqs, "PCRE extension must be available")
        assert req.is_fulfilled() is False
        # no version recommendation without a version
        assert not any(
            req.get_test_message().startswith("PCRE extension should") for req in reqs
        )

    def test_mbstring_overload(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(
            make_snapshot(ini_update={"mbstring.func_overload": "2"})
        )

        assert failed_messages(reqs) == ["string functions should not be overloaded"]
        assert find(reqs, "string functions").is_optional() is False

    def test_mbstring_overload_ignored_without_mbstring(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            ini_update={"mbstring.func_overload": "2"},
            extensions={"core": "8.3.4", "intl": "8.3.4"},
        )

        reqs = runtime_requirements(snapshot)

        assert "string functions should not be overloaded" not in failed_messages(reqs)

    def test_outdated_apc(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            version="5.4.45",
            ini_update={"apc.enabled": "1"},
            extensions_update={"apc": "3.1.9"},
            functions=["apc_store", "iconv"],
        )

        req = find(runtime_requirements(snapshot), "APC version must be at least")
        assert req.get_test_message() == (
            "APC version must be at least 3.1.13 when using PHP 5.4"
        )
        assert req.is_fulfilled() is False

    def test_disabled_apc_is_not_checked(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            extensions_update={"apc": "3.1.9"},
            functions=["apc_store"],
        )

        reqs = runtime_requirements(snapshot)

        assert not any(
            req.get_test_message().startswith("APC version") for req in reqs
        )

    def test_suhosin_without_phar_whitelist(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            extensions_update={"suhosin": "0.9.38"},
            ini_update={"suhosin.executor.include.whitelist": "tar"},
        )

        req = find(runtime_requirements(snapshot), "suhosin.executor.include")
        assert req.is_fulfilled() is False

    def test_suhosin_with_phar_whitelist(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            extensions_update={"suhosin": "0.9.38"},
            ini_update={"suhosin.executor.include.whitelist": "tar,PHAR"},
        )

        req = find(runtime_requirements(snapshot), "suhosin.executor.include")
        assert req.is_fulfilled() is True

    def test_xdebug_settings(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            extensions_update={"xdebug": "3.3.1"},
            ini_update={
                "xdebug.show_exception_trace": "1",
                "xdebug.max_nesting_level": "512",
            },
        )

        reqs = runtime_requirements(snapshot)

        assert failed_messages(reqs) == [
            "xdebug.show_exception_trace must be disabled in php.ini"
        ]
        # scream is absent on Xdebug 3
        assert find(reqs, "xdebug.scream").is_fulfilled() is True


# =============================================================================
# Recommendations
# =============================================================================


class TestRecommendations:
    """Failures of optional runtime checks."""

    def test_outdated_pcre(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            constants={"PCRE_VERSION": "7.9 2009-04-11", "INTL_ICU_VERSION": "74.1"}
        )

        req = find(runtime_requirements(snapshot), "PCRE extension should be")
        assert req.get_test_message() == (
            "PCRE extension should be at least version 8.0 (7.9 installed)"
        )
        assert req.is_fulfilled() is False

    def test_missing_intl_skips_intl_settings(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            extensions={"core": "8.3.4", "zend opcache": "8.3.4"},
            classes=["DomDocument", "PDO"],
            constants={"PCRE_VERSION": "10.42 2022-12-11"},
            collator_works=None,
        )

        reqs = runtime_requirements(snapshot)

        assert failed_messages(reqs) == ["intl extension should be available"]
        assert not any("ICU" in req.get_test_message() for req in reqs)

    def test_broken_collator(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(collator_works=False))

        assert failed_messages(reqs) == [
            "intl extension should be correctly configured"
        ]

    def test_old_icu(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            constants={"PCRE_VERSION": "10.42 2022-12-11", "INTL_ICU_VERSION": "3.8"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == [
            "intl ICU version should be at least 4+"
        ]

    def test_unknown_icu_version_is_not_checked(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        reqs = runtime_requirements(
            make_snapshot(constants={"PCRE_VERSION": "10.42 2022-12-11"})
        )

        assert failed_messages(reqs) == []
        assert not any(
            req.get_test_message().startswith("intl ICU version") for req in reqs.all()
        )

    def test_intl_error_level(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(ini_update={"intl.error_level": "2"}))

        assert failed_messages(reqs) == ["intl.error_level should be 0 in php.ini"]

    def test_no_accelerator(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(ini_update={"opcache.enable": "0"}))

        assert failed_messages(reqs) == ["a PHP accelerator should be installed"]

    def test_alternative_accelerator(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            ini_update={"opcache.enable": "0", "apc.enabled": "1"},
            extensions_update={"apc": "5.1.23"},
        )

        assert failed_messages(runtime_requirements(snapshot)) == []

    @pytest.mark.parametrize(
        ("option", "message"),
        [
            ("short_open_tag", "short_open_tag should be disabled in php.ini"),
            ("magic_quotes_gpc", "magic_quotes_gpc should be disabled in php.ini"),
            ("register_globals", "register_globals should be disabled in php.ini"),
            ("session.auto_start", "session.auto_start should be disabled in php.ini"),
        ],
    )
    def test_options_that_should_be_off(
        self, make_snapshot: SnapshotFactory, option: str, message: str
    ) -> None:
        reqs = runtime_requirements(make_snapshot(ini_update={option: "1"}))

        assert failed_messages(reqs) == [message]
        assert find(reqs, message).is_optional() is True

    def test_low_xdebug_nesting_level(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(
            make_snapshot(ini_update={"xdebug.max_nesting_level": "100"})
        )

        assert failed_messages(reqs) == [
            "xdebug.max_nesting_level should be above 100 in php.ini"
        ]

    def test_xdebug_nesting_level_checked_once(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        reqs = runtime_requirements(make_snapshot(extensions_update={"xdebug": "3.3.1"}))

        matches = [
            req
            for req in reqs
            if req.get_test_message().startswith("xdebug.max_nesting_level")
        ]
        assert len(matches) == 1

    def test_post_max_size_above_memory_limit(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            ini_update={"memory_limit": "64M", "post_max_size": "128M"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == [
            '"memory_limit" should be greater than "post_max_size".'
        ]

    def test_unlimited_memory(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            ini_update={"memory_limit": "-1", "post_max_size": "1G"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == []

    def test_upload_larger_than_post(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            ini_update={"post_max_size": "2M", "upload_max_filesize": "8M"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == [
            '"post_max_size" should be greater than "upload_max_filesize".'
        ]

    def test_unlimited_post_size(self, make_snapshot: SnapshotFactory) -> None:
        snapshot = make_snapshot(
            ini_update={"post_max_size": "0", "upload_max_filesize": "8M"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == []

    def test_pdo_without_drivers(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(pdo_drivers=[]))

        assert failed_messages(reqs) == [
            "PDO should have some drivers installed (currently available: none)"
        ]

    def test_pdo_driver_list_in_message(self, healthy_snapshot: RuntimeSnapshot) -> None:
        req = find(runtime_requirements(healthy_snapshot), "PDO should have")

        assert req.get_test_message() == (
            "PDO should have some drivers installed (currently available: mysql, sqlite)"
        )

    def test_missing_pdo(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(classes=["DomDocument", "Collator"]))

        assert failed_messages(reqs) == ["PDO should be installed"]


class TestPlatformSpecific:
    """Checks that depend on the operating system."""

    def test_posix_isatty_not_checked_on_windows(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            windows=True,
            os="WINNT",
            remove_functions=("posix_isatty",),
            ini_update={"realpath_cache_size": "5M"},
        )

        assert failed_messages(runtime_requirements(snapshot)) == []

    def test_posix_isatty_missing(self, make_snapshot: SnapshotFactory) -> None:
        reqs = runtime_requirements(make_snapshot(remove_functions=("posix_isatty",)))

        assert failed_messages(reqs) == ["posix_isatty() should be available"]

    def test_small_realpath_cache_on_windows(
        self, make_snapshot: SnapshotFactory
    ) -> None:
        snapshot = make_snapshot(
            windows=True, ini_update={"realpath_cache_size": "4096K"}
        )

        assert failed_messages(runtime_requirements(snapshot)) == [
            "realpath_cache_size should be at least 5M in php.ini"
        ]
