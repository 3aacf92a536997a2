"""Tests for bp_log/insights.py - today-vs-yesterday insights."""

from datetime import datetime, timedelta

import pytest
from conftest import NOW, make_session, make_single

from bp_log.categories import Category
from bp_log.insights import (
    BETTER,
    EVENING,
    MORNING,
    SAME,
    WORSE,
    classify_trend,
    compute_insights,
    logging_streak,
    time_of_day_pattern,
    to_points,
    week_summary,
)

DAY = timedelta(days=1)


class TestComputeInsights:
    """Tests for compute_insights()."""

    def test_empty_history(self, now):
        assert compute_insights([], now) is None

    def test_nothing_today_or_yesterday(self, now):
        history = [make_single(now - 3 * DAY)]
        assert compute_insights(history, now) is None

    def test_trend_better(self, now):
        history = [
            make_single(now.replace(hour=8), systolic=126),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.trend == BETTER
        assert result.trend_delta == -4
        assert result.today_systolic == 126
        assert result.yesterday_systolic == 130

    def test_trend_same_within_band(self, now):
        history = [
            make_single(now.replace(hour=8), systolic=128),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        assert compute_insights(history, now).trend == SAME

    def test_trend_worse(self, now):
        history = [
            make_session(now.replace(hour=8), systolic=138),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.trend == WORSE
        assert result.trend_delta == 8

    def test_trend_uses_daily_mean(self, now):
        history = [
            make_single(now.replace(hour=7), systolic=120),
            make_single(now.replace(hour=9), systolic=124),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.today_systolic == 122
        assert result.trend == BETTER

    def test_trend_band_uses_unrounded_means(self, now):
        """126.5 vs 130 is 3.5 lower, outside the band."""
        history = [
            make_single(now.replace(hour=7), systolic=126),
            make_single(now.replace(hour=9), systolic=127),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.trend == BETTER
        assert result.trend_delta == -4
        assert result.today_systolic == 127

    def test_trend_exact_band_edge_is_same(self, now):
        history = [
            make_single(now.replace(hour=7), systolic=126),
            make_single(now.replace(hour=9), systolic=128),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.trend == SAME
        assert result.trend_delta == -3

    def test_no_trend_without_yesterday(self, now):
        result = compute_insights([make_single(now.replace(hour=8))], now)

        assert result.trend is None
        assert result.trend_delta is None
        assert result.yesterday_category is None

    def test_today_category_from_means(self, now):
        history = [
            make_single(now.replace(hour=7), systolic=118, diastolic=76),
            make_single(now.replace(hour=9), systolic=124, diastolic=78),
        ]
        result = compute_insights(history, now)

        # 121/77
        assert result.today_category == Category.ELEVATED
        assert result.display_category == Category.ELEVATED

    def test_yesterday_only_falls_back(self, now):
        history = [make_single((now - DAY).replace(hour=20), systolic=142, diastolic=88)]
        result = compute_insights(history, now)

        assert result.today_category is None
        assert result.yesterday_category == Category.STAGE2
        assert result.display_category == Category.STAGE2
        assert result.trend is None

    def test_normal_today_not_replaced_by_yesterday(self, now):
        history = [
            make_single(now.replace(hour=8), systolic=112, diastolic=72),
            make_single((now - DAY).replace(hour=8), systolic=145, diastolic=92),
        ]
        result = compute_insights(history, now)

        assert result.display_category == Category.NORMAL
        assert result.to_dict()["today_category"] == "normal"

    def test_sessions_and_singles_both_count(self, now):
        history = [
            make_session(now.replace(hour=8), systolic=150, diastolic=95),
            make_single(now.replace(hour=12), systolic=130, diastolic=85),
        ]
        assert compute_insights(history, now).today_systolic == 140

    def test_future_day_not_today(self, now):
        """Entries dated tomorrow do not fill today's bucket."""
        history = [make_single(now + DAY)]
        assert compute_insights(history, now) is None

    def test_phrase_keys(self, now):
        history = [
            make_single(now.replace(hour=8), systolic=126),
            make_single((now - DAY).replace(hour=8), systolic=130),
            make_single((now - 2 * DAY).replace(hour=9), systolic=130),
        ]
        result = compute_insights(history, now)

        assert result.phrase_keys() == ["trend.better", "streak.days", "pattern.morning"]

    def test_to_dict(self, now):
        history = [
            make_single(now.replace(hour=8), systolic=126),
            make_single((now - DAY).replace(hour=8), systolic=130),
        ]
        result = compute_insights(history, now).to_dict()

        assert result["trend"] == "better"
        assert result["today_category"] == "stage1"
        assert result["streak"] == 2
        assert result["week"]["count_7d"] == 2


class TestClassifyTrend:
    @pytest.mark.parametrize(
        "delta,expected",
        [(0, SAME), (3, SAME), (-3, SAME), (4, WORSE), (-4, BETTER), (-20, BETTER)],
    )
    def test_band(self, delta, expected):
        assert classify_trend(delta) == expected


class TestLoggingStreak:
    """Tests for logging_streak()."""

    def test_no_entries(self, now):
        assert logging_streak([], now) == 0

    def test_three_days_ending_today(self, now):
        points = to_points(
            [
                make_single(now.replace(hour=8)),
                make_single(now - DAY),
                make_single(now - 2 * DAY),
            ]
        )
        assert logging_streak(points, now) == 3

    def test_empty_today_starts_from_yesterday(self, now):
        points = to_points([make_single(now - DAY), make_single(now - 2 * DAY)])
        assert logging_streak(points, now) == 2

    def test_gap_breaks_streak(self, now):
        points = to_points(
            [
                make_single(now.replace(hour=8)),
                make_single(now - DAY),
                make_single(now - 3 * DAY),
                make_single(now - 4 * DAY),
            ]
        )
        assert logging_streak(points, now) == 2

    def test_multiple_entries_same_day(self, now):
        points = to_points(
            [
                make_single(now.replace(hour=7)),
                make_single(now.replace(hour=9)),
                make_single(now.replace(hour=12)),
            ]
        )
        assert logging_streak(points, now) == 1

    def test_gap_before_yesterday(self, now):
        points = to_points([make_single(now - 2 * DAY)])
        assert logging_streak(points, now) == 0

    def test_early_morning_entries_use_calendar_day(self, now):
        points = to_points(
            [
                make_single(datetime(2025, 1, 15, 0, 5)),
                make_single(datetime(2025, 1, 14, 23, 55)),
            ]
        )
        assert logging_streak(points, now) == 2


class TestTimeOfDayPattern:
    """Tests for time_of_day_pattern()."""

    def test_too_few_samples(self, now):
        points = to_points([make_single(now.replace(hour=8)), make_single(now - DAY)])
        assert time_of_day_pattern(points, now) is None

    def test_morning(self, now):
        points = to_points(
            [
                make_single((now - DAY).replace(hour=7)),
                make_single((now - 2 * DAY).replace(hour=8)),
                make_single((now - 3 * DAY).replace(hour=19)),
            ]
        )
        assert time_of_day_pattern(points, now) == MORNING

    def test_evening(self, now):
        points = to_points(
            [
                make_single((now - DAY).replace(hour=18)),
                make_single((now - 2 * DAY).replace(hour=21)),
                make_single((now - 3 * DAY).replace(hour=11)),
            ]
        )
        assert time_of_day_pattern(points, now) == EVENING

    def test_tie_goes_to_morning(self, now):
        points = to_points(
            [
                make_single((now - DAY).replace(hour=5)),
                make_single((now - 2 * DAY).replace(hour=10)),
                make_single((now - DAY).replace(hour=17)),
                make_single((now - 2 * DAY).replace(hour=20)),
            ]
        )
        assert time_of_day_pattern(points, now) == MORNING

    def test_afternoon_and_night_ignored(self, now):
        points = to_points(
            [
                make_single((now - DAY).replace(hour=13)),
                make_single((now - 2 * DAY).replace(hour=23)),
                make_single((now - 3 * DAY).replace(hour=3)),
                make_single((now - 4 * DAY).replace(hour=8)),
            ]
        )
        assert time_of_day_pattern(points, now) is None

    def test_older_than_a_week_ignored(self, now):
        points = to_points(
            [
                make_single((now - 8 * DAY).replace(hour=7)),
                make_single((now - 9 * DAY).replace(hour=7)),
                make_single((now - 10 * DAY).replace(hour=7)),
            ]
        )
        assert time_of_day_pattern(points, now) is None


class TestWeekSummary:
    """Tests for week_summary()."""

    def test_compares_with_previous_week(self, now):
        points = to_points(
            [
                make_single(now - DAY, systolic=130, diastolic=85, pulse=70),
                make_single(now - 2 * DAY, systolic=134, diastolic=87, pulse=72),
                make_single(now - 9 * DAY, systolic=140, diastolic=90, pulse=75),
            ]
        )
        result = week_summary(points, now)

        assert (result.systolic, result.diastolic, result.pulse) == (132, 86, 71)
        assert result.count_7d == 2
        assert result.delta_systolic == -8
        assert result.delta_diastolic == -4
        assert result.category == Category.STAGE1

    def test_empty(self, now):
        result = week_summary([], now)

        assert result.count_7d == 0
        assert result.systolic is None
        assert result.delta_systolic is None
        assert result.category is None


def test_to_points_skips_incomplete():
    history = [
        make_single(NOW, systolic=0),
        make_single(NOW, diastolic=0),
        make_single(NOW),
    ]
    assert len(to_points(history)) == 1
