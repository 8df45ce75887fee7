"""Shorthand byte size parsing for php.ini values.

See https://www.php.net/manual/en/faq.using.php#faq.using.shorthandbytes
"""

from __future__ import annotations

import math

from phpcheck.requirements.models import ABSENT, IniValue, ini_int

__all__ = ["convert_shorthand_size", "exceeds"]

_UNITS = {
    "k": 1024,
    "m": 1024 * 1024,
    "g": 1024 * 1024 * 1024,
}


def convert_shorthand_size(size: IniValue, infinite_value: str = "-1") -> float:
    """Convert a shorthand size into a number of bytes.

    Args:
        size: Size such as "512", "16k", "2M" or "1G" (unit is case-insensitive).
        infinite_value: The value meaning "unlimited" for this option, e.g.
            "-1" for memory_limit or "0" for post_max_size.

    Returns:
        The size in bytes, or math.inf for the unlimited value. Malformed input
        is converted leniently (leading digits, otherwise 0).

    Example:
        >>> convert_shorthand_size("16k")
        16384
        >>> convert_shorthand_size("0", infinite_value="0")
        inf
    """
    if size is ABSENT:
        size = ""
    size = size.strip()

    if size == infinite_value:
        return math.inf

    if size.isdigit():
        return int(size)

    unit = size[-1:].lower()
    number = ini_int(size[:-1])
    return number * _UNITS.get(unit, 1)


def exceeds(larger: float, smaller: float) -> bool:
    """Whether one size is greater than another, unlimited sizes always win.

    Example:
        >>> exceeds(math.inf, 1000)
        True
        >>> exceeds(1000, 2000)
        False
    """
    return math.isinf(larger) or math.isinf(smaller) or larger > smaller
