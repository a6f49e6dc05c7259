"""Tests for cooldown and growth policies."""

from datetime import UTC, date, datetime, timedelta

from newsecho.domain.policies import (
    can_unsubscribe,
    count_in_windows,
    daily_series,
    engagement_growth,
    growth_percentage,
    remaining_cooldown,
)

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)
DAY = timedelta(hours=24)


def test_cooldown_remaining_inside_window() -> None:
    assert remaining_cooldown(NOW - timedelta(hours=1), NOW, DAY) == timedelta(hours=23)
    assert can_unsubscribe(NOW - timedelta(hours=1), NOW, DAY) is False


def test_cooldown_elapsed_exactly_at_boundary() -> None:
    assert remaining_cooldown(NOW - DAY, NOW, DAY) == timedelta(0)
    assert can_unsubscribe(NOW - DAY, NOW, DAY) is True


def test_missing_subscribed_at_is_treated_as_old() -> None:
    assert can_unsubscribe(None, NOW, DAY) is True


def test_zero_cooldown_always_allows() -> None:
    assert can_unsubscribe(NOW, NOW, timedelta(0)) is True


def test_growth_percentage() -> None:
    assert growth_percentage(0, 0) == 0.0
    assert growth_percentage(5, 0) == 100.0
    assert growth_percentage(3, 2) == 50.0
    assert growth_percentage(1, 3) == -66.7


def test_count_in_windows_splits_current_and_previous() -> None:
    window = timedelta(days=7)
    stamps = [
        NOW - timedelta(days=1),
        NOW - timedelta(days=6),
        NOW - timedelta(days=8),
        NOW - timedelta(days=20),
        NOW + timedelta(days=1),
        None,
    ]
    counts = count_in_windows(stamps, NOW, window)
    assert (counts.current, counts.previous) == (2, 1)
    assert counts.growth == 100.0


def test_daily_series_oldest_first() -> None:
    today = date(2024, 5, 15)
    stamps = [
        datetime(2024, 5, 15, 8, tzinfo=UTC),
        datetime(2024, 5, 15, 9, tzinfo=UTC),
        datetime(2024, 5, 9, 9, tzinfo=UTC),
        datetime(2024, 5, 8, 9, tzinfo=UTC),
    ]
    assert daily_series(stamps, today) == [1, 0, 0, 0, 0, 0, 2]


def test_engagement_growth_compares_first_and_last_three_days() -> None:
    assert engagement_growth([1, 1, 0, 5, 1, 1, 2]) == 100.0
    assert engagement_growth([0] * 7) == 0.0
    assert engagement_growth([0, 0, 0, 0, 1, 0, 0]) == 100.0
