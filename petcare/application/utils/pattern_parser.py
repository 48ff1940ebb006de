from __future__ import annotations

import logging

from petcare.domain.entities.recurrence import (
    LAST,
    WEEK_ORDER,
    RecurrenceKind,
    RecurrencePattern,
    Unrecognized,
    Weekday,
)

logger = logging.getLogger(__name__)

NTH_VALUES: dict[str, int | str] = {"1": 1, "2": 2, "3": 3, "4": 4, "last": LAST}
NTH_LABELS: dict[int | str, str] = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th", LAST: "Last"}

WORKWEEK = frozenset({Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY})
WEEKEND = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})


def parse(pattern: str | None) -> RecurrencePattern | Unrecognized:
    """
    Decode a pattern string such as "weekly_1_monday,wednesday" or
    "monthly_1_last_friday". Anything that does not fit the grammar comes back
    as Unrecognized, which callers treat as "no recurrence".
    """
    raw = (pattern or "").strip()
    if not raw:
        return Unrecognized(raw)

    tokens = raw.split("_")
    kind = tokens[0].lower()

    if kind == RecurrenceKind.DAILY.value and len(tokens) == 2:
        weekdays = _parse_weekdays(tokens[1])
        if len(weekdays) != 1:
            return Unrecognized(raw)
        return RecurrencePattern(kind=RecurrenceKind.DAILY, weekdays=weekdays)

    if kind == RecurrenceKind.WEEKLY.value and len(tokens) == 3:
        weekdays = _parse_weekdays(tokens[2])
        if not weekdays:
            return Unrecognized(raw)
        return RecurrencePattern(
            kind=RecurrenceKind.WEEKLY,
            weekdays=weekdays,
            interval=_parse_interval(tokens[1], raw),
        )

    if kind == RecurrenceKind.MONTHLY.value and len(tokens) == 4:
        nth = NTH_VALUES.get(tokens[2].strip().lower())
        weekdays = _parse_weekdays(tokens[3])
        if nth is None or not weekdays:
            return Unrecognized(raw)
        return RecurrencePattern(
            kind=RecurrenceKind.MONTHLY,
            weekdays=weekdays,
            interval=_parse_interval(tokens[1], raw),
            nth=nth,
        )

    return Unrecognized(raw)


def format_pattern(pattern: RecurrencePattern | Unrecognized) -> str:
    """Encode a pattern back into its wire form."""
    if isinstance(pattern, Unrecognized):
        return pattern.raw

    days = ",".join(day.wire_name for day in _ordered(pattern.weekdays))
    if pattern.kind is RecurrenceKind.DAILY:
        return f"daily_{days}"
    if pattern.kind is RecurrenceKind.WEEKLY:
        return f"weekly_{pattern.interval}_{days}"
    return f"monthly_{pattern.interval}_{pattern.nth}_{days}"


def describe(pattern: RecurrencePattern | Unrecognized) -> str:
    """Human-readable label for review screens."""
    if isinstance(pattern, Unrecognized):
        return pattern.raw

    labels = ", ".join(day.label for day in _ordered(pattern.weekdays))

    if pattern.kind is RecurrenceKind.DAILY:
        return f"Every {labels}"

    if pattern.kind is RecurrenceKind.WEEKLY:
        single = pattern.interval == 1
        every = "Every week" if single else f"Every {pattern.interval} weeks"
        if len(pattern.weekdays) == 7:
            return "Every day" if single else f"{every}, all days"
        if pattern.weekdays == WORKWEEK:
            return "Every weekday" if single else f"{every} on weekdays"
        if pattern.weekdays == WEEKEND:
            return "Every weekend" if single else f"{every} on weekends"
        return f"{every} on {labels}"

    every = "Every month" if pattern.interval == 1 else f"Every {pattern.interval} months"
    return f"{every} on the {NTH_LABELS.get(pattern.nth, str(pattern.nth))} {labels}"


def _parse_weekdays(csv: str) -> frozenset[Weekday]:
    weekdays = set()
    for token in csv.split(","):
        if not token.strip():
            continue
        weekday = Weekday.from_token(token)
        if weekday is None:
            logger.debug("Skipping unknown weekday token", extra={"reason": token})
            continue
        weekdays.add(weekday)
    return frozenset(weekdays)


def _parse_interval(token: str, raw: str) -> int:
    try:
        interval = int(token.strip())
    except ValueError:
        interval = 0
    if interval < 1:
        logger.debug("Invalid interval, using 1", extra={"pattern": raw})
        return 1
    return interval


def _ordered(weekdays: frozenset[Weekday]) -> list[Weekday]:
    return [day for day in WEEK_ORDER if day in weekdays]
