"""Requirement value objects and configuration-derived requirements.

This module defines the core data structures of the requirement model:
- Requirement: an immutable pass/fail fact with severity and help text
- FixedBoolean / Predicate: the two ways a configuration option is evaluated
- config_requirement(): builds a Requirement from a php.ini option
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final, Literal, Protocol, TypeAlias

from phpcheck.exceptions import InvalidRequirementError

__all__ = [
    "ABSENT",
    "IniValue",
    "ConfigSource",
    "Requirement",
    "FixedBoolean",
    "Predicate",
    "Evaluation",
    "config_requirement",
    "strip_tags",
    "loose_bool",
    "ini_int",
]

#: Value of a php.ini option as returned by ini_get(); False when the option
#: does not exist.
IniValue: TypeAlias = str | Literal[False]

#: Sentinel for a configuration option that does not exist.
ABSENT: Final = False

_TAG_PATTERN = re.compile(r"<[^>]*>")
_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")


class ConfigSource(Protocol):
    """Anything that can look up the current value of a php.ini option."""

    def ini_get(self, name: str) -> IniValue: ...


def strip_tags(markup: str) -> str:
    """Remove markup from a help text.

    Args:
        markup: Text possibly containing HTML tags and entities.

    Returns:
        Plain text without tags; entities are unescaped and stray angle
        brackets dropped, so the result never contains markup characters.

    Example:
        >>> strip_tags('Install the <strong>intl</strong> extension.')
        'Install the intl extension.'
    """
    text = _TAG_PATTERN.sub("", markup)
    text = html.unescape(text)
    return text.replace("<", "").replace(">", "")


def loose_bool(value: IniValue) -> bool:
    """Interpret an ini value the way PHP compares it against a boolean.

    Absent options, "" and "0" are false; any other string is true.
    """
    if value is ABSENT:
        return False
    return value not in ("", "0")


def ini_int(value: IniValue) -> int:
    """Convert an ini value to an integer like PHP's (int) cast.

    Leading whitespace and an optional sign are accepted, trailing garbage is
    ignored, and anything without leading digits (including an absent option)
    is 0.
    """
    if value is ABSENT:
        return 0
    match = _INT_PATTERN.match(value)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True, slots=True, init=False)
class Requirement:
    """A single requirement, e.g. an installed extension.

    It is either a mandatory requirement or an optional recommendation.
    Instances are created once while a requirement set is built and never
    change afterwards.

    Attributes:
        fulfilled: Whether the requirement is fulfilled.
        test_message: Short description of what is being checked.
        help_html: Help text for resolving the problem, may contain HTML.
        help_text: Plain-text help; derived from help_html when not given.
        optional: True for a recommendation, False for a requirement.

    Example:
        >>> req = Requirement(
        ...     False,
        ...     "intl extension should be available",
        ...     "Install and enable the <strong>intl</strong> extension.",
        ...     optional=True,
        ... )
        >>> req.help_text
        'Install and enable the intl extension.'
    """

    fulfilled: bool
    test_message: str
    help_html: str
    help_text: str
    optional: bool

    def __init__(
        self,
        fulfilled: bool,
        test_message: str,
        help_html: str,
        help_text: str | None = None,
        optional: bool = False,
    ) -> None:
        object.__setattr__(self, "fulfilled", bool(fulfilled))
        object.__setattr__(self, "test_message", str(test_message))
        object.__setattr__(self, "help_html", str(help_html))
        object.__setattr__(
            self,
            "help_text",
            strip_tags(self.help_html) if help_text is None else str(help_text),
        )
        object.__setattr__(self, "optional", bool(optional))

    def is_fulfilled(self) -> bool:
        return self.fulfilled

    def get_test_message(self) -> str:
        return self.test_message

    def get_help_text(self) -> str:
        return self.help_text

    def get_help_html(self) -> str:
        return self.help_html

    def is_optional(self) -> bool:
        return self.optional


@dataclass(frozen=True, slots=True)
class FixedBoolean:
    """Evaluation expecting an option to be on (True) or off (False)."""

    expected: bool

    def evaluate(self, value: IniValue) -> bool:
        return loose_bool(value) == self.expected


@dataclass(frozen=True, slots=True)
class Predicate:
    """Evaluation delegating to a function of the raw option value."""

    check: Callable[[IniValue], bool] = field(repr=False)

    def evaluate(self, value: IniValue) -> bool:
        return bool(self.check(value))


Evaluation: TypeAlias = FixedBoolean | Predicate


def _as_evaluation(
    evaluation: Evaluation | bool | Callable[[IniValue], bool],
) -> Evaluation:
    if isinstance(evaluation, FixedBoolean | Predicate):
        return evaluation
    if isinstance(evaluation, bool):
        return FixedBoolean(evaluation)
    if callable(evaluation):
        return Predicate(evaluation)
    raise InvalidRequirementError(
        f"Evaluation must be a boolean or a callable, got {type(evaluation).__name__}"
    )


def config_requirement(
    source: ConfigSource,
    name: str,
    evaluation: Evaluation | bool | Callable[[IniValue], bool],
    *,
    approve_absence: bool = False,
    test_message: str | None = None,
    help_html: str | None = None,
    help_text: str | None = None,
    optional: bool = False,
) -> Requirement:
    """Build a requirement from a php.ini configuration option.

    Args:
        source: Where the current option value is read from.
        name: The configuration name passed to ini_get().
        evaluation: Either the boolean the option should evaluate to, or a
            predicate receiving the raw option value.
        approve_absence: Fulfil the requirement when the option does not
            exist at all (abandoned options, options of missing extensions).
        test_message: Message for the check. Derived for boolean evaluations
            when omitted; mandatory for predicates.
        help_html: HTML help text. Derived for boolean evaluations when
            omitted; mandatory for predicates.
        help_text: Plain help text; inferred from help_html when omitted.
        optional: Whether this is only a recommendation.

    Returns:
        The evaluated Requirement.

    Raises:
        InvalidRequirementError: If a predicate evaluation lacks its
            test_message or help_html.
    """
    rule = _as_evaluation(evaluation)

    if isinstance(rule, Predicate):
        if test_message is None or help_html is None:
            raise InvalidRequirementError(
                "You must provide test_message and help_html for a predicate "
                "evaluation.",
                option=name,
            )
    else:
        state = "enabled" if rule.expected else "disabled"
        if test_message is None:
            verb = "should" if optional else "must"
            test_message = f"{name} {verb} be {state} in php.ini"
        if help_html is None:
            switch = "on" if rule.expected else "off"
            help_html = (
                f"Set <strong>{name}</strong> to <strong>{switch}</strong> "
                'in php.ini<a href="#phpini">*</a>.'
            )

    value = source.ini_get(name)
    fulfilled = rule.evaluate(value) or (approve_absence and value is ABSENT)

    return Requirement(fulfilled, test_message, help_html, help_text, optional)
