"""Tests for trace flag expiration handling."""

from datetime import datetime, timedelta, timezone

from apex_quick_launch.services.trace_flags import (
    LOG_TIMER_LENGTH,
    calculate_expiration,
    format_datetime,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_keeps_expiration_beyond_log_timer() -> None:
    """Keeps an expiration that outlasts the log timer."""
    expiration = NOW + timedelta(hours=2)

    assert calculate_expiration(expiration, NOW) == expiration


def test_extends_expiration_within_log_timer() -> None:
    """Extends an expiration that ends before the log timer."""
    expiration = NOW + timedelta(minutes=5)

    assert calculate_expiration(expiration, NOW) == NOW + LOG_TIMER_LENGTH


def test_extends_expired_flag() -> None:
    """Extends an expiration in the past."""
    expiration = NOW - timedelta(days=3)

    assert calculate_expiration(expiration, NOW) == NOW + LOG_TIMER_LENGTH


def test_format_datetime_uses_utc_milliseconds() -> None:
    """Formats datetimes in UTC with millisecond precision."""
    value = datetime(2026, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    assert format_datetime(value) == "2026-01-01T12:30:00.000+00:00"
