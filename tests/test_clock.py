"""Tests for bp_log/clock.py."""

from datetime import datetime

from bp_log.clock import FixedClock, SystemClock


class TestFixedClock:
    def test_returns_instant(self, now):
        assert FixedClock(now).now() == now

    def test_accepts_iso_string(self):
        assert FixedClock("2025-01-15T14:00:00").now() == datetime(2025, 1, 15, 14, 0)


class TestSystemClock:
    def test_naive_local_time(self):
        before = datetime.now()
        result = SystemClock().now()

        assert result.tzinfo is None
        assert result >= before
