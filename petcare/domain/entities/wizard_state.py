from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class WizardStep(str, Enum):
    PET = "pet"
    SERVICE = "service"
    ADDRESS = "address"
    SCHEDULE = "schedule"
    REVIEW = "review"


STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.PET,
    WizardStep.SERVICE,
    WizardStep.ADDRESS,
    WizardStep.SCHEDULE,
    WizardStep.REVIEW,
)


class WizardPhase(str, Enum):
    SETUP = "setup"
    DETAILS = "details"
    REVIEW = "review"


PHASE_OF_STEP: dict[WizardStep, WizardPhase] = {
    WizardStep.PET: WizardPhase.SETUP,
    WizardStep.SERVICE: WizardPhase.SETUP,
    WizardStep.ADDRESS: WizardPhase.DETAILS,
    WizardStep.SCHEDULE: WizardPhase.DETAILS,
    WizardStep.REVIEW: WizardPhase.REVIEW,
}


class BookingType(str, Enum):
    ONE_TIME = "one-time"
    RECURRING = "recurring"


@dataclass(frozen=True)
class Selections:
    pet_id: str | None = None
    service_id: str | None = None
    unit_price: Decimal = Decimal("0")
    address_id: str | None = None
    booking_type: BookingType = BookingType.ONE_TIME
    start_date: date | None = None
    time: str | None = None  # HH:MM, one-time bookings
    times: tuple[str, ...] = ()  # HH:MM, sorted, recurring bookings
    pattern: str | None = None  # wire encoding, e.g. "weekly_1_monday"
    end_date: date | None = None

    @property
    def is_recurring(self) -> bool:
        return self.booking_type is BookingType.RECURRING


@dataclass(frozen=True)
class WizardState:
    step: WizardStep = WizardStep.PET
    selections: Selections = Selections()
    rebook_of: str | None = None  # original booking id when rebooking

    @property
    def phase(self) -> WizardPhase:
        return PHASE_OF_STEP[self.step]
