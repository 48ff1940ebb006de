from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from petcare.domain.entities.wizard_state import BookingType, WizardStep


@dataclass(frozen=True)
class SelectPet:
    pet_id: str | None


@dataclass(frozen=True)
class SelectService:
    service_id: str | None
    unit_price: Decimal = Decimal("0")


@dataclass(frozen=True)
class SelectAddress:
    address_id: str | None


@dataclass(frozen=True)
class SetBookingType:
    booking_type: BookingType


@dataclass(frozen=True)
class SetStartDate:
    start_date: date | None


@dataclass(frozen=True)
class SetTime:
    time: str | None


@dataclass(frozen=True)
class AddTime:
    time: str


@dataclass(frozen=True)
class RemoveTime:
    time: str


@dataclass(frozen=True)
class SetPattern:
    pattern: str | None


@dataclass(frozen=True)
class SetEndDate:
    end_date: date | None


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Prev:
    pass


@dataclass(frozen=True)
class GoTo:
    step: WizardStep


WizardEvent = (
    SelectPet
    | SelectService
    | SelectAddress
    | SetBookingType
    | SetStartDate
    | SetTime
    | AddTime
    | RemoveTime
    | SetPattern
    | SetEndDate
    | Next
    | Prev
    | GoTo
)
