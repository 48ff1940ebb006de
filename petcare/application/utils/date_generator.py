from __future__ import annotations

import calendar
from datetime import date, timedelta
from functools import lru_cache

from petcare.domain.entities.recurrence import (
    LAST,
    DateRange,
    RecurrenceKind,
    RecurrencePattern,
    Unrecognized,
    Weekday,
)


@lru_cache(maxsize=256)
def generate(pattern: RecurrencePattern | Unrecognized, date_range: DateRange) -> tuple[date, ...]:
    """
    Expand a recurrence pattern into the concrete dates it covers, inclusive of
    both range ends. Returns an empty tuple for an empty range, an unrecognized
    pattern or a daily pattern (daily patterns are labels only).
    """
    if isinstance(pattern, Unrecognized) or date_range.is_empty:
        return ()

    if pattern.kind is RecurrenceKind.WEEKLY:
        dates = _expand_weekly(pattern, date_range)
    elif pattern.kind is RecurrenceKind.MONTHLY:
        dates = _expand_monthly(pattern, date_range)
    else:
        return ()

    return tuple(sorted(set(dates)))


def nth_weekday_of_month(year: int, month: int, weekday: Weekday, nth: int) -> date | None:
    """Nth occurrence of weekday in the month, None when it would spill into the next month."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    day = 1 + (7 + weekday - first_weekday) % 7 + (nth - 1) * 7
    if not 1 <= day <= days_in_month:
        return None
    return date(year, month, day)


def last_weekday_of_month(year: int, month: int, weekday: Weekday) -> date:
    last = date(year, month, calendar.monthrange(year, month)[1])
    return last - timedelta(days=(7 + last.weekday() - weekday) % 7)


def _expand_weekly(pattern: RecurrencePattern, date_range: DateRange) -> list[date]:
    dates: list[date] = []
    step_days = pattern.interval * 7
    anchor = date_range.start
    while True:
        # days left before the range end; never step or offset past it
        remaining = (date_range.end - anchor).days
        for weekday in pattern.weekdays:
            offset = (7 + weekday - anchor.weekday()) % 7
            if offset <= remaining:
                dates.append(anchor + timedelta(days=offset))
        if step_days > remaining:
            return dates
        anchor = anchor + timedelta(days=step_days)


def _expand_monthly(pattern: RecurrencePattern, date_range: DateRange) -> list[date]:
    dates: list[date] = []
    index = _month_index(date_range.start)
    last_index = _month_index(date_range.end)
    while index <= last_index:
        year, month = index // 12, index % 12 + 1
        for weekday in pattern.weekdays:
            if pattern.nth == LAST:
                candidate = last_weekday_of_month(year, month, weekday)
            else:
                candidate = nth_weekday_of_month(year, month, weekday, int(pattern.nth or 1))
            if candidate is not None and candidate in date_range:
                dates.append(candidate)
        index += pattern.interval
    return dates


def _month_index(value: date) -> int:
    return value.year * 12 + (value.month - 1)
