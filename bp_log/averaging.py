"""Averaging of raw readings and entry-time validation.

A raw reading ("triple") is anything exposing systolic, diastolic and pulse,
either as mapping keys (form input) or attributes (Reading objects). Values
may be numbers or numeric strings; fractional values are truncated.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

SYSTOLIC_RANGE = (50, 250)
DIASTOLIC_RANGE = (30, 150)
PULSE_RANGE = (30, 200)

FIELDS = ("systolic", "diastolic", "pulse")


@dataclass(frozen=True)
class Average:
    """Integer-rounded mean of a set of readings."""

    systolic: int
    diastolic: int
    pulse: int
    count: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "count": self.count,
        }


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, dict):
        return raw.get(name)
    return getattr(raw, name, None)


def _to_int(value: Any) -> int | None:
    """Truncate a numeric value or string to an int; None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def parse_triple(raw: Any) -> tuple[int, int, int] | None:
    """Parse systolic, diastolic and pulse from a raw reading.

    Returns:
        Tuple of ints, or None if any field is missing or not numeric
    """
    values = [_to_int(_field(raw, name)) for name in FIELDS]
    if any(v is None for v in values):
        return None
    systolic, diastolic, pulse = values
    return systolic, diastolic, pulse


def in_range(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low <= value <= high


def is_valid_triple(systolic: int, diastolic: int, pulse: int) -> bool:
    """Check values against the accepted entry ranges (inclusive)."""
    return (
        in_range(systolic, SYSTOLIC_RANGE)
        and in_range(diastolic, DIASTOLIC_RANGE)
        and in_range(pulse, PULSE_RANGE)
    )


def is_blank_reading(raw: Any) -> bool:
    """True when no field of the reading has been filled in."""
    return all(_field(raw, name) in (None, "") for name in FIELDS)


def is_valid_reading(raw: Any) -> bool:
    """Check that a raw reading is complete and within entry ranges."""
    parsed = parse_triple(raw)
    return parsed is not None and is_valid_triple(*parsed)


def exact_mean(values: Iterable[int]) -> Decimal | None:
    """Unrounded arithmetic mean, or None for an empty input."""
    values = list(values)
    if not values:
        return None
    return Decimal(sum(values)) / Decimal(len(values))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def mean(values: Iterable[int]) -> int | None:
    """Arithmetic mean rounded half-up to an integer.

    Returns:
        Rounded mean, or None for an empty input
    """
    exact = exact_mean(values)
    if exact is None:
        return None
    return round_half_up(exact)


def average(readings: Iterable[Any]) -> Average | None:
    """Average the complete readings in a batch.

    Readings with a missing, empty, non-numeric or zero field are dropped.
    No range check is applied here; see is_valid_reading for that.

    Args:
        readings: Raw readings

    Returns:
        Average with count of contributing readings, or None if none qualify
    """
    valid = [
        parsed
        for parsed in (parse_triple(r) for r in readings)
        if parsed is not None and all(parsed)
    ]
    if not valid:
        return None

    systolic, diastolic, pulse = zip(*valid)
    return Average(
        systolic=mean(systolic),
        diastolic=mean(diastolic),
        pulse=mean(pulse),
        count=len(valid),
    )
