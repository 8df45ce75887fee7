"""Ordered container of requirements and recommendations."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from phpcheck.exceptions import InvalidRequirementError
from phpcheck.requirements.models import (
    ConfigSource,
    Evaluation,
    IniValue,
    Requirement,
    config_requirement,
)

__all__ = ["RequirementCollection"]


class RequirementCollection:
    """A set of Requirement instances kept in insertion order.

    The order only matters for display. All views are computed on demand
    and return new lists, so callers can never alter the collection through
    them.

    Args:
        config: Source of php.ini values used by add_config_requirement()
            and add_config_recommendation().

    Example:
        >>> reqs = RequirementCollection(config=snapshot)
        >>> reqs.add_requirement(
        ...     snapshot.function_exists("iconv"),
        ...     "iconv() must be available",
        ...     "Install and enable the <strong>iconv</strong> extension.",
        ... )
        >>> reqs.add_config_recommendation("short_open_tag", False)
        >>> [r.test_message for r in reqs.get_failed_requirements()]
        []
    """

    def __init__(self, config: ConfigSource | None = None) -> None:
        self._config = config
        self._requirements: list[Requirement] = []

    def __len__(self) -> int:
        return len(self._requirements)

    def __iter__(self) -> Iterator[Requirement]:
        return iter(list(self._requirements))

    def add(self, requirement: Requirement) -> None:
        self._requirements.append(requirement)

    def add_requirement(
        self,
        fulfilled: bool,
        test_message: str,
        help_html: str,
        help_text: str | None = None,
    ) -> None:
        """Add a mandatory requirement."""
        self.add(Requirement(fulfilled, test_message, help_html, help_text, False))

    def add_recommendation(
        self,
        fulfilled: bool,
        test_message: str,
        help_html: str,
        help_text: str | None = None,
    ) -> None:
        """Add an optional recommendation."""
        self.add(Requirement(fulfilled, test_message, help_html, help_text, True))

    def add_config_requirement(
        self,
        name: str,
        evaluation: Evaluation | bool | Callable[[IniValue], bool],
        approve_absence: bool = False,
        test_message: str | None = None,
        help_html: str | None = None,
        help_text: str | None = None,
    ) -> None:
        """Add a mandatory requirement on a php.ini option.

        See config_requirement() for the meaning of the arguments.
        """
        self.add(
            config_requirement(
                self._require_config(name),
                name,
                evaluation,
                approve_absence=approve_absence,
                test_message=test_message,
                help_html=help_html,
                help_text=help_text,
                optional=False,
            )
        )

    def add_config_recommendation(
        self,
        name: str,
        evaluation: Evaluation | bool | Callable[[IniValue], bool],
        approve_absence: bool = False,
        test_message: str | None = None,
        help_html: str | None = None,
        help_text: str | None = None,
    ) -> None:
        """Add an optional recommendation on a php.ini option.

        See config_requirement() for the meaning of the arguments.
        """
        self.add(
            config_requirement(
                self._require_config(name),
                name,
                evaluation,
                approve_absence=approve_absence,
                test_message=test_message,
                help_html=help_html,
                help_text=help_text,
                optional=True,
            )
        )

    def add_collection(self, collection: RequirementCollection) -> None:
        """Append every requirement of another collection, keeping order."""
        self._requirements.extend(collection.all())

    def all(self) -> list[Requirement]:
        """Return both requirements and recommendations."""
        return list(self._requirements)

    def get_requirements(self) -> list[Requirement]:
        """Return all mandatory requirements."""
        return [req for req in self._requirements if not req.is_optional()]

    def get_failed_requirements(self) -> list[Requirement]:
        """Return the mandatory requirements that were not met."""
        return [
            req
            for req in self._requirements
            if not req.is_fulfilled() and not req.is_optional()
        ]

    def get_recommendations(self) -> list[Requirement]:
        """Return all optional recommendations."""
        return [req for req in self._requirements if req.is_optional()]

    def get_failed_recommendations(self) -> list[Requirement]:
        """Return the recommendations that were not met."""
        return [
            req
            for req in self._requirements
            if not req.is_fulfilled() and req.is_optional()
        ]

    def _require_config(self, name: str) -> ConfigSource:
        if self._config is None:
            raise InvalidRequirementError(
                f"Cannot check php.ini option {name!r}: the collection has no "
                "configuration source.",
                option=name,
            )
        return self._config
