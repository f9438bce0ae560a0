"""Measurement units and their conversion to and from points.

Every length handled by the library is stored in points (1/72 inch).
Converting into a unit rounds the result to that unit's granularity, so a
value that went through ``to_canonical`` and ``from_canonical`` once is a
fixed point of the pair.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

from .exceptions import UnknownUnitError

POINTS_PER_INCH = 72.0
MILLIMETERS_PER_INCH = 25.4


def _round_half_up(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


class Unit(Enum):
    """Units a page can be measured in.

    Attributes:
        full_name: Human-readable unit name
        abbr: Two letter abbreviation used in labels
        scale: Points per one unit
        decimals: Decimal places kept when converting into the unit
        increment_step: Step for incremental adjustment of a field
    """

    INCH = ("inch", "in", POINTS_PER_INCH, 2, 0.1)
    MILLIMETER = ("millimeter", "mm", POINTS_PER_INCH / MILLIMETERS_PER_INCH, 1, 1.0)
    POINT = ("point", "pt", 1.0, 0, 1.0)

    def __init__(
        self,
        full_name: str,
        abbr: str,
        scale: float,
        decimals: int,
        increment_step: float,
    ) -> None:
        self.full_name = full_name
        self.abbr = abbr
        self.scale = scale
        self.decimals = decimals
        self.increment_step = increment_step

    def __str__(self) -> str:
        return self.full_name

    @property
    def display_precision(self) -> int:
        """Number of decimal places shown for values in this unit."""
        return self.decimals

    @property
    def granularity(self) -> float:
        """Smallest distinguishable value in this unit (0.01 in, 0.1 mm, 1 pt)."""
        return 10.0 ** -self.decimals

    def to_canonical(self, value: float) -> float:
        """Convert *value* in this unit to points."""
        return value * self.scale

    def from_canonical(self, points: float) -> float:
        """Convert *points* to this unit, rounded half-up to the unit's granularity."""
        return _round_half_up(points / self.scale, self.decimals)

    @classmethod
    def parse(cls, value: Union["Unit", str]) -> "Unit":
        """Resolve a member, member name, full name or abbreviation to a :class:`Unit`.

        Raises:
            UnknownUnitError: If *value* names no unit.
        """

        if isinstance(value, Unit):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for unit in cls:
                if key in (unit.name.lower(), unit.full_name, unit.abbr):
                    return unit
            alias = _PLURALS.get(key)
            if alias is not None:
                return alias
        raise UnknownUnitError(f"Unknown measurement unit: {value!r}")


_PLURALS = {
    "inches": Unit.INCH,
    "millimeters": Unit.MILLIMETER,
    "millimetres": Unit.MILLIMETER,
    "points": Unit.POINT,
}


def to_canonical(value: float, unit: Unit) -> float:
    """Return *value* expressed in points."""
    return unit.to_canonical(value)


def from_canonical(points: float, unit: Unit) -> float:
    """Return *points* expressed in *unit*, rounded to its granularity."""
    return unit.from_canonical(points)


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert *value* between units, rounding to the target unit's granularity."""

    return to_unit.from_canonical(from_unit.to_canonical(value))


def round_value(value: float, unit: Unit) -> float:
    """Round a value already expressed in *unit* to that unit's granularity."""

    return _round_half_up(value, unit.decimals)


def format_value(value: float, unit: Unit) -> str:
    """
    Format a value in *unit* for display.

    Trailing zeros are dropped, so inches render like ``0.##``,
    millimeters like ``0.#`` and points as integers.

    Args:
        value: Value already expressed in *unit*
        unit: Unit the value is expressed in

    Returns:
        Formatted string (e.g., "8.5", "297", "612")
    """
    text = f"{round_value(value, unit):.{unit.decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text
