from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from petcare.domain.entities.wizard_state import BookingType, WizardPhase, WizardStep


class EventType(str, Enum):
    select_pet = "select_pet"
    select_service = "select_service"
    select_address = "select_address"
    set_booking_type = "set_booking_type"
    set_start_date = "set_start_date"
    set_time = "set_time"
    add_time = "add_time"
    remove_time = "remove_time"
    set_pattern = "set_pattern"
    set_end_date = "set_end_date"
    next = "next"
    prev = "prev"
    go_to = "go_to"


class SelectionsSchema(BaseModel):
    pet_id: str | None = None
    service_id: str | None = None
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    address_id: str | None = None
    booking_type: BookingType = BookingType.ONE_TIME
    start_date: date | None = None
    time: str | None = None
    times: list[str] = Field(default_factory=list)
    pattern: str | None = None
    end_date: date | None = None


class WizardStateSchema(BaseModel):
    step: WizardStep = WizardStep.PET
    selections: SelectionsSchema = Field(default_factory=SelectionsSchema)
    rebook_of: str | None = None


class WizardEventSchema(BaseModel):
    type: EventType
    value: str | None = None
    unit_price: Decimal | None = Field(default=None, ge=0)


class ReduceRequestSchema(BaseModel):
    state: WizardStateSchema = Field(default_factory=WizardStateSchema)
    event: WizardEventSchema


class ScheduleSummarySchema(BaseModel):
    pattern_label: str
    session_dates: list[date]
    sessions_per_day: int
    total_sessions: int
    unit_price: Decimal
    total_price: Decimal


class WizardResponseSchema(BaseModel):
    state: WizardStateSchema
    phase: WizardPhase
    progress: float
    can_proceed: bool
    schedule: ScheduleSummarySchema


class SchedulePreviewRequestSchema(BaseModel):
    pattern: str
    start_date: date
    end_date: date
    times: list[str] = Field(default_factory=list)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)


class SchedulePreviewResponseSchema(ScheduleSummarySchema):
    recognized: bool
    warnings: list[str] = Field(default_factory=list)


class CheckoutResponseSchema(BaseModel):
    pet_id: str
    service_id: str
    address_id: str
    booking_type: BookingType
    start_date: date
    end_date: date | None = None
    pattern: str | None = None
    time: str | None = None
    times: list[str] = Field(default_factory=list)
    sessions: int
    total_price: Decimal
    rebook_of: str | None = None
    query: dict[str, str]
