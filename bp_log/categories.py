"""Blood pressure categories according to the AHA 2017 guidelines.

Normal:              SYS < 120   and DIA < 80
Elevated:            SYS 120-129 and DIA < 80
High BP Stage 1:     SYS 130-139 or  DIA 80-89
High BP Stage 2:     SYS >= 140  or  DIA >= 90
Hypertensive Crisis: SYS > 180   or  DIA > 120
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Category(IntEnum):
    """Severity category, ordered from least to most severe."""

    NORMAL = 0
    ELEVATED = 1
    STAGE1 = 2
    STAGE2 = 3
    CRISIS = 4

    @property
    def key(self) -> str:
        """Stable identifier used in storage and label lookup."""
        return self.name.lower()

    @property
    def rank(self) -> int:
        return int(self)

    @property
    def label_key(self) -> str:
        """Label Provider key for the display name."""
        return f"category.{self.key}"

    @classmethod
    def from_key(cls, key: str) -> Category:
        """Look up a category by its identifier.

        Raises:
            KeyError: If key is not a known category
        """
        return cls[key.upper()]


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def classify(systolic: Any, diastolic: Any) -> Category:
    """Classify a systolic/diastolic pair.

    Rules are checked in order of severity; the first match wins. Missing or
    non-numeric input yields Category.NORMAL.

    Args:
        systolic: Systolic pressure in mmHg
        diastolic: Diastolic pressure in mmHg

    Returns:
        Matching category
    """
    s = _to_number(systolic)
    d = _to_number(diastolic)
    if s is None or d is None:
        return Category.NORMAL

    if s > 180 or d > 120:
        return Category.CRISIS
    if s >= 140 or d >= 90:
        return Category.STAGE2
    if s >= 130 or d >= 80:
        return Category.STAGE1
    if s >= 120 and d < 80:
        return Category.ELEVATED
    return Category.NORMAL
