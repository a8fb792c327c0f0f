"""
Recurring pattern -> service dates.

Pure functions only: same rule and window always give the same dates. Day numbering is
0 = Sunday .. 6 = Saturday (what the admin UI stores), not Python's Monday-based weekday().

Bounds: start_date is inclusive (a matching start_date is the first occurrence),
last_generated_date is exclusive (already materialized), the window is inclusive on both
ends and end_date caps it.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from churchapp.core.constants import PATTERN_TYPES
from churchapp.core.errors import InvalidPattern

_STEP_WEEKS = {"weekly": 1, "bi_weekly": 2}


@dataclass(frozen=True)
class PatternRule:
    """Recurrence description detached from the ORM row."""

    pattern_type: str
    day_of_week: int | None
    start_date: date
    week_of_month: int | None = None
    interval_weeks: int | None = None
    end_date: date | None = None
    last_generated_date: date | None = None

    @classmethod
    def from_model(cls, row: Any) -> "PatternRule":
        return cls(
            pattern_type=row.pattern_type,
            day_of_week=row.day_of_week,
            start_date=row.start_date,
            week_of_month=row.week_of_month,
            interval_weeks=row.interval_weeks,
            end_date=row.end_date,
            last_generated_date=row.last_generated_date,
        )


def sunday_based_weekday(d: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return (d.weekday() + 1) % 7


def validate_pattern(rule: PatternRule) -> None:
    """Raise InvalidPattern when the rule cannot be evaluated."""
    if rule.pattern_type not in PATTERN_TYPES:
        raise InvalidPattern(f"Pattern type must be one of: {', '.join(PATTERN_TYPES)}")
    if rule.day_of_week is None or not 0 <= rule.day_of_week <= 6:
        raise InvalidPattern("Day of week (0-6) is required")
    if rule.pattern_type == "monthly" and (rule.week_of_month is None or not 1 <= rule.week_of_month <= 5):
        raise InvalidPattern("Week of month (1-5) is required for monthly patterns")
    if rule.pattern_type == "custom" and (rule.interval_weeks is None or rule.interval_weeks < 1):
        raise InvalidPattern("Interval weeks (>= 1) is required for custom patterns")


def first_on_or_after(d: date, day_of_week: int) -> date:
    """First date >= d that falls on day_of_week (Sunday-based)."""
    return d + timedelta(days=(day_of_week - sunday_based_weekday(d)) % 7)


def nth_weekday_of_month(year: int, month: int, day_of_week: int, n: int) -> date | None:
    """n-th (1-5) day_of_week of the month, or None when the month has fewer than n."""
    first = first_on_or_after(date(year, month, 1), day_of_week)
    day = first.day + (n - 1) * 7
    if day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def _bounds(rule: PatternRule, window_start: date, window_end: date) -> tuple[date, date]:
    lo = max(window_start, rule.start_date)
    if rule.last_generated_date is not None and rule.last_generated_date >= lo:
        lo = rule.last_generated_date + timedelta(days=1)
    hi = window_end
    if rule.end_date is not None and rule.end_date < hi:
        hi = rule.end_date
    return lo, hi


def _every_n_weeks(rule: PatternRule, step_weeks: int, lo: date, hi: date) -> list[date]:
    # Anchored at the first occurrence on/after start_date, so alternate weeks stay stable
    # no matter which window or watermark a run starts from.
    anchor = first_on_or_after(rule.start_date, rule.day_of_week)
    step = 7 * step_weeks
    if lo <= anchor:
        current = anchor
    else:
        k = -(-(lo - anchor).days // step)  # ceil
        current = anchor + timedelta(days=k * step)
    dates: list[date] = []
    while current <= hi:
        dates.append(current)
        current += timedelta(days=step)
    return dates


def _monthly(rule: PatternRule, lo: date, hi: date) -> list[date]:
    dates: list[date] = []
    year, month = lo.year, lo.month
    while (year, month) <= (hi.year, hi.month):
        d = nth_weekday_of_month(year, month, rule.day_of_week, rule.week_of_month)
        if d is not None and lo <= d <= hi:
            dates.append(d)
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return dates


def calculate_service_dates(rule: PatternRule, window_start: date, window_end: date) -> list[date]:
    """
    Dates due for generation for this rule inside [window_start, window_end].

    Strictly increasing, no duplicates, all after last_generated_date and not after end_date.
    Raises InvalidPattern for rules that cannot be evaluated.
    """
    validate_pattern(rule)
    lo, hi = _bounds(rule, window_start, window_end)
    if lo > hi:
        return []
    if rule.pattern_type == "monthly":
        return _monthly(rule, lo, hi)
    step_weeks = rule.interval_weeks if rule.pattern_type == "custom" else _STEP_WEEKS[rule.pattern_type]
    return _every_n_weeks(rule, step_weeks, lo, hi)
