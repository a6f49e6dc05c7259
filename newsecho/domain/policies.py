"""Business rules shared by services: unsubscribe cooldown and dashboard growth math.

Pure functions over already-fetched values; callers pass `now` so results are
deterministic in tests.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta


def remaining_cooldown(
    subscribed_at: datetime | None, now: datetime, cooldown: timedelta
) -> timedelta:
    """Time left before an unsubscribe is allowed (never negative).

    A subscription without a timestamp predates cooldown tracking and is
    treated as old enough.
    """
    if subscribed_at is None:
        return timedelta(0)
    remaining = subscribed_at + cooldown - now
    return remaining if remaining > timedelta(0) else timedelta(0)


def can_unsubscribe(
    subscribed_at: datetime | None, now: datetime, cooldown: timedelta
) -> bool:
    """True iff at least `cooldown` has elapsed since `subscribed_at`."""
    return remaining_cooldown(subscribed_at, now, cooldown) == timedelta(0)


def growth_percentage(current: int | float, previous: int | float) -> float:
    """Percentage change from previous to current, rounded to one decimal.

    previous == 0 yields 0.0 when current is also 0 and 100.0 otherwise.
    """
    if previous == 0:
        return 0.0 if current == 0 else 100.0
    return round((current - previous) / previous * 100, 1)


@dataclass(frozen=True)
class WindowCounts:
    current: int
    previous: int

    @property
    def growth(self) -> float:
        return growth_percentage(self.current, self.previous)


def count_in_windows(
    timestamps: Iterable[datetime | None],
    now: datetime,
    window: timedelta,
) -> WindowCounts:
    """Count items in [now - window, now] and [now - 2*window, now - window).

    Items without a timestamp or dated in the future are ignored.
    """
    current_start = now - window
    previous_start = now - 2 * window
    current = previous = 0
    for ts in timestamps:
        if ts is None or ts > now:
            continue
        if ts >= current_start:
            current += 1
        elif ts >= previous_start:
            previous += 1
    return WindowCounts(current=current, previous=previous)


def daily_series(
    timestamps: Iterable[datetime | None], today: date, days: int = 7
) -> list[int]:
    """Per-day counts for the `days` calendar days ending today (oldest first)."""
    start = today - timedelta(days=days - 1)
    series = [0] * days
    for ts in timestamps:
        if ts is None:
            continue
        index = (ts.date() - start).days
        if 0 <= index < days:
            series[index] += 1
    return series


def engagement_growth(series: list[int]) -> float:
    """Compare the first three days of a series with the last three days."""
    early = sum(series[:3])
    recent = sum(series[-3:])
    return growth_percentage(recent, early)
