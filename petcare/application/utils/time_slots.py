from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MORNING_HOURS = (5, 12)
EVENING_HOURS = (12, 22)
MORNING_CUTOFF = time(20, 0)  # on the day before the service
EVENING_LEAD = timedelta(hours=4)


@dataclass(frozen=True)
class SlotCheck:
    is_bookable: bool
    reason: str | None = None


def parse_slot(value: str) -> time | None:
    """Parse an HH:MM 24h slot. Returns None for anything else."""
    match = TIME_PATTERN.match(value.strip()) if value else None
    if not match:
        return None
    return time(int(match.group(1)), int(match.group(2)))


def add_time(times: tuple[str, ...], value: str, max_times: int) -> tuple[str, ...]:
    """Add a slot to a sorted slot list. Invalid, duplicate or excess slots leave it unchanged."""
    slot = parse_slot(value)
    if slot is None:
        return times
    normalized = slot.strftime("%H:%M")
    if normalized in times or len(times) >= max_times:
        return times
    return tuple(sorted((*times, normalized)))


def remove_time(times: tuple[str, ...], value: str) -> tuple[str, ...]:
    return tuple(t for t in times if t != value.strip())


def check_time_slot(
    service_date: date,
    slot: str,
    timezone: ZoneInfo,
    now: datetime | None = None,
) -> SlotCheck:
    """
    Apply the advance-booking rules in the business time zone:
    morning slots (05:00-12:00) must be booked by 20:00 the day before,
    afternoon/evening slots (12:00-22:00) at least four hours ahead.
    """
    parsed = parse_slot(slot)
    if parsed is None:
        return SlotCheck(False, "Time must be in HH:MM format")

    if now is None:
        now = datetime.now(timezone)
    else:
        now = now.astimezone(timezone) if now.tzinfo else now.replace(tzinfo=timezone)

    service_at = datetime.combine(service_date, parsed, tzinfo=timezone)

    if MORNING_HOURS[0] <= parsed.hour < MORNING_HOURS[1]:
        cutoff = datetime.combine(service_date - timedelta(days=1), MORNING_CUTOFF, tzinfo=timezone)
        if now > cutoff:
            return SlotCheck(False, "Morning services (5 AM - 12 PM) must be booked by 8 PM the day before")
    elif EVENING_HOURS[0] <= parsed.hour < EVENING_HOURS[1]:
        if now > service_at - EVENING_LEAD:
            return SlotCheck(
                False,
                "Afternoon/evening services (12 PM - 10 PM) must be booked at least 4 hours in advance",
            )
    else:
        return SlotCheck(False, "Services are only available between 5 AM and 10 PM")

    if service_at <= now:
        return SlotCheck(False, "Service time must be in the future")

    return SlotCheck(True)
