"""Insights derived from the merged reading history.

All day boundaries are computed by stepping back from ``now`` in whole
24-hour steps and comparing local calendar dates.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from bp_log.averaging import exact_mean, mean, round_half_up
from bp_log.categories import Category, classify
from bp_log.models import HistoryEntry, to_local

DAY = timedelta(hours=24)

# Today's mean systolic within this many mmHg of yesterday's counts as "same"
TREND_BAND = 3

MORNING_HOURS = range(5, 12)
EVENING_HOURS = range(17, 22)
PATTERN_DAYS = 7
PATTERN_MIN_SAMPLES = 3

SAME = "same"
BETTER = "better"
WORSE = "worse"
MORNING = "morning"
EVENING = "evening"


@dataclass(frozen=True)
class Point:
    """Effective values and local timestamp of one history entry."""

    timestamp: datetime
    systolic: int
    diastolic: int
    pulse: int | None


@dataclass(frozen=True)
class WeekSummary:
    """Trailing 7-day means compared with the 7 days before."""

    systolic: int | None
    diastolic: int | None
    pulse: int | None
    prev_systolic: int | None
    prev_diastolic: int | None
    count_7d: int

    @property
    def delta_systolic(self) -> int | None:
        if self.systolic is None or self.prev_systolic is None:
            return None
        return self.systolic - self.prev_systolic

    @property
    def delta_diastolic(self) -> int | None:
        if self.diastolic is None or self.prev_diastolic is None:
            return None
        return self.diastolic - self.prev_diastolic

    @property
    def category(self) -> Category | None:
        if self.systolic is None:
            return None
        return classify(self.systolic, self.diastolic)


@dataclass(frozen=True)
class Insights:
    """Today-vs-yesterday insights for display."""

    today_category: Category | None
    yesterday_category: Category | None
    today_systolic: int | None
    yesterday_systolic: int | None
    trend: str | None
    trend_delta: int | None
    streak: int
    time_pattern: str | None
    week: WeekSummary

    @property
    def display_category(self) -> Category | None:
        """Today's category, falling back to yesterday's when today is empty."""
        if self.today_category is not None:
            return self.today_category
        return self.yesterday_category

    def phrase_keys(self) -> list[str]:
        """Label keys for the insight phrases that apply."""
        keys = []
        if self.trend is not None:
            keys.append(f"trend.{self.trend}")
        if self.streak > 0:
            keys.append("streak.days")
        if self.time_pattern is not None:
            keys.append(f"pattern.{self.time_pattern}")
        return keys

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "today_category": self.today_category.key if self.today_category is not None else None,
            "yesterday_category": (
                self.yesterday_category.key if self.yesterday_category is not None else None
            ),
            "today_systolic": self.today_systolic,
            "yesterday_systolic": self.yesterday_systolic,
            "trend": self.trend,
            "trend_delta": self.trend_delta,
            "streak": self.streak,
            "time_pattern": self.time_pattern,
            "week": {
                "systolic": self.week.systolic,
                "diastolic": self.week.diastolic,
                "pulse": self.week.pulse,
                "delta_systolic": self.week.delta_systolic,
                "delta_diastolic": self.week.delta_diastolic,
                "count_7d": self.week.count_7d,
            },
        }


def to_points(history: Iterable[HistoryEntry]) -> list[Point]:
    """Project history entries, dropping those without systolic and diastolic."""
    points = []
    for entry in history:
        if not entry.systolic or not entry.diastolic:
            continue
        points.append(
            Point(
                timestamp=to_local(entry.timestamp),
                systolic=entry.systolic,
                diastolic=entry.diastolic,
                pulse=entry.pulse,
            )
        )
    return points


def bucket_category(points: list[Point]) -> Category | None:
    if not points:
        return None
    return classify(mean(p.systolic for p in points), mean(p.diastolic for p in points))


def classify_trend(delta: int | Decimal) -> str:
    """Classify a day-over-day systolic change."""
    if abs(delta) <= TREND_BAND:
        return SAME
    return BETTER if delta < 0 else WORSE


def logging_streak(points: list[Point], now: datetime) -> int:
    """Count consecutive days with at least one entry, ending today.

    An empty today does not break the streak; counting starts from yesterday.
    """
    logged_days = {p.timestamp.date() for p in points}
    if not logged_days:
        return 0

    day = now
    if day.date() not in logged_days:
        day -= DAY

    streak = 0
    while day.date() in logged_days:
        streak += 1
        day -= DAY
    return streak


def time_of_day_pattern(points: list[Point], now: datetime) -> str | None:
    """Dominant logging time over the trailing week.

    Returns:
        "morning", "evening", or None when there are too few samples
    """
    cutoff = now - PATTERN_DAYS * DAY
    recent = [p for p in points if p.timestamp >= cutoff]
    morning = sum(1 for p in recent if p.timestamp.hour in MORNING_HOURS)
    evening = sum(1 for p in recent if p.timestamp.hour in EVENING_HOURS)

    if morning + evening < PATTERN_MIN_SAMPLES:
        return None
    return MORNING if morning >= evening else EVENING


def week_summary(points: list[Point], now: datetime) -> WeekSummary:
    complete = [p for p in points if p.pulse]
    cutoff_7 = now - 7 * DAY
    cutoff_14 = now - 14 * DAY
    last_7 = [p for p in complete if p.timestamp >= cutoff_7]
    prev_7 = [p for p in complete if cutoff_14 <= p.timestamp < cutoff_7]

    return WeekSummary(
        systolic=mean(p.systolic for p in last_7),
        diastolic=mean(p.diastolic for p in last_7),
        pulse=mean(p.pulse for p in last_7),
        prev_systolic=mean(p.systolic for p in prev_7),
        prev_diastolic=mean(p.diastolic for p in prev_7),
        count_7d=len(last_7),
    )


def compute_insights(history: Iterable[HistoryEntry], now: datetime) -> Insights | None:
    """Compute insights for the day containing ``now``.

    Args:
        history: Merged history entries
        now: Current local time

    Returns:
        Insights, or None if nothing was logged today or yesterday
    """
    now = to_local(now)
    points = to_points(history)

    today = now.date()
    yesterday = (now - DAY).date()
    today_points = [p for p in points if p.timestamp.date() == today]
    yesterday_points = [p for p in points if p.timestamp.date() == yesterday]

    if not today_points and not yesterday_points:
        return None

    today_exact = exact_mean(p.systolic for p in today_points)
    yesterday_exact = exact_mean(p.systolic for p in yesterday_points)

    # Band is applied to the unrounded difference; the displayed delta is rounded
    trend = None
    trend_delta = None
    if today_exact is not None and yesterday_exact is not None:
        exact_delta = today_exact - yesterday_exact
        trend = classify_trend(exact_delta)
        trend_delta = round_half_up(exact_delta)

    return Insights(
        today_category=bucket_category(today_points),
        yesterday_category=bucket_category(yesterday_points),
        today_systolic=mean(p.systolic for p in today_points),
        yesterday_systolic=mean(p.systolic for p in yesterday_points),
        trend=trend,
        trend_delta=trend_delta,
        streak=logging_streak(points, now),
        time_pattern=time_of_day_pattern(points, now),
        week=week_summary(points, now),
    )
