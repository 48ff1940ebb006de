from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum


class Weekday(IntEnum):
    # Same numbering as date.weekday()
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def wire_name(self) -> str:
        return self.name.lower()

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @staticmethod
    def from_token(token: str) -> "Weekday | None":
        try:
            return Weekday[token.strip().upper()]
        except KeyError:
            return None


# Order the day picker emits days in
WEEK_ORDER: tuple[Weekday, ...] = (
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)


class RecurrenceKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


LAST = "last"  # nth value for the last occurrence in a month


@dataclass(frozen=True)
class RecurrencePattern:
    kind: RecurrenceKind
    weekdays: frozenset[Weekday]
    interval: int = 1
    nth: int | str | None = None  # monthly only: 1..4 or LAST


@dataclass(frozen=True)
class Unrecognized:
    raw: str = ""  # legacy label, shown as-is, never expanded


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end
