from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Mapping

from petcare.application.utils.date_generator import generate
from petcare.application.utils.pattern_parser import parse
from petcare.application.utils.session_aggregator import aggregate
from petcare.application.utils.time_slots import add_time, parse_slot, remove_time
from petcare.domain.entities.booking import CheckoutPayload, PriorBooking
from petcare.domain.entities.pricing import SessionPricing
from petcare.domain.entities.recurrence import DateRange, Unrecognized
from petcare.domain.entities.wizard_events import (
    AddTime,
    GoTo,
    Next,
    Prev,
    RemoveTime,
    SelectAddress,
    SelectPet,
    SelectService,
    SetBookingType,
    SetEndDate,
    SetPattern,
    SetStartDate,
    SetTime,
    WizardEvent,
)
from petcare.domain.entities.wizard_state import (
    STEP_ORDER,
    BookingType,
    Selections,
    WizardState,
    WizardStep,
)


def session_dates(selections: Selections) -> tuple[date, ...]:
    """Dates the booking covers: the start date for one-time, the expanded pattern for recurring."""
    if selections.start_date is None:
        return ()
    if not selections.is_recurring:
        return (selections.start_date,)
    if selections.end_date is None:
        return ()
    return generate(parse(selections.pattern), DateRange(selections.start_date, selections.end_date))


def session_pricing(selections: Selections) -> SessionPricing:
    per_day = len(selections.times) if selections.is_recurring else 1
    return aggregate(session_dates(selections), per_day, selections.unit_price)


def is_step_complete(step: WizardStep, selections: Selections) -> bool:
    if step is WizardStep.PET:
        return bool(selections.pet_id)
    if step is WizardStep.SERVICE:
        return bool(selections.service_id)
    if step is WizardStep.ADDRESS:
        return bool(selections.address_id)
    if step is WizardStep.SCHEDULE:
        if selections.is_recurring:
            return bool(
                selections.start_date
                and selections.times
                and not isinstance(parse(selections.pattern), Unrecognized)
                and selections.end_date
                and session_dates(selections)
            )
        return bool(selections.start_date and selections.time)
    return True


def progress(state: WizardState) -> float:
    """Percentage of steps up to and including the current one that are complete."""
    reached = STEP_ORDER[: STEP_ORDER.index(state.step) + 1]
    done = sum(1 for step in reached if is_step_complete(step, state.selections))
    return done / len(STEP_ORDER) * 100


class BookingWizardUseCase:
    """Pure state machine behind the booking flow: every call returns a new WizardState."""

    def __init__(self, max_times_per_day: int = 4) -> None:
        self._max_times = max_times_per_day
        self._logger = logging.getLogger(__name__)

    def blank_state(self) -> WizardState:
        return WizardState()

    def restore_from_query(self, params: Mapping[str, str], unit_price: Decimal = Decimal("0")) -> WizardState:
        """
        Rebuild the wizard when the user comes back from the payment page.
        Needs pet, service and date, and only applies to new bookings; anything
        else starts a blank draft.
        """
        has_booking = params.get("pet") and params.get("service") and params.get("date")
        is_existing = params.get("bookingId") or params.get("recurringBookingId")
        if not has_booking or is_existing:
            return self.blank_state()

        recurring = params.get("recurring") == "true"
        selections = Selections(
            pet_id=params.get("pet"),
            service_id=params.get("service"),
            unit_price=unit_price,
            address_id=params.get("address") or None,
            booking_type=BookingType.RECURRING if recurring else BookingType.ONE_TIME,
            start_date=_parse_date(params.get("date")),
        )
        if recurring:
            selections = replace(
                selections,
                pattern=params.get("pattern") or None,
                end_date=_parse_date(params.get("endDate")),
                times=self._parse_times(params.get("times")),
            )
        else:
            selections = replace(selections, time=params.get("time") or None)

        rebook_of = params.get("originalBookingId") if params.get("rebook") == "true" else None
        self._logger.info("Booking restored from query", extra={"step": WizardStep.REVIEW.value})
        return WizardState(step=WizardStep.REVIEW, selections=selections, rebook_of=rebook_of)

    def from_prior_booking(self, booking: PriorBooking, unit_price: Decimal = Decimal("0")) -> WizardState:
        """Seed a rebook: copy the old selections and land on schedule so timing gets re-confirmed."""
        selections = Selections(
            pet_id=booking.pet_id,
            service_id=booking.service_id,
            unit_price=unit_price,
            address_id=booking.address_id,
        )
        if booking.recurring:
            selections = replace(
                selections,
                booking_type=BookingType.RECURRING,
                pattern=booking.pattern,
                end_date=booking.end_date,
                times=self._normalize_times(booking.times),
            )
        else:
            selections = replace(selections, time=booking.time)
        return WizardState(step=WizardStep.SCHEDULE, selections=selections, rebook_of=booking.booking_id)

    def reduce(self, state: WizardState, event: WizardEvent) -> WizardState:
        if isinstance(event, Next):
            return self._next(state)
        if isinstance(event, Prev):
            return self._prev(state)
        if isinstance(event, GoTo):
            return self._go_to(state, event.step)

        selections = self._apply_selection(state.selections, event)
        if selections is state.selections:
            return state
        return replace(state, selections=selections)

    def can_proceed(self, state: WizardState) -> bool:
        return is_step_complete(state.step, state.selections)

    def build_checkout(self, state: WizardState) -> CheckoutPayload:
        """Package the reviewed booking for the payment step."""
        if state.step is not WizardStep.REVIEW:
            raise ValueError("Checkout is only available from the review step")
        incomplete = [step.value for step in STEP_ORDER if not is_step_complete(step, state.selections)]
        if incomplete:
            raise ValueError(f"Booking is incomplete: {', '.join(incomplete)}")

        selections = state.selections
        pricing = session_pricing(selections)
        recurring = selections.is_recurring
        payload = CheckoutPayload(
            pet_id=selections.pet_id or "",
            service_id=selections.service_id or "",
            address_id=selections.address_id or "",
            booking_type=selections.booking_type,
            start_date=selections.start_date,
            sessions=pricing.total_sessions,
            total_price=pricing.total_price,
            end_date=selections.end_date if recurring else None,
            pattern=selections.pattern if recurring else None,
            time=None if recurring else selections.time,
            times=selections.times if recurring else (),
            rebook_of=state.rebook_of,
        )
        self._logger.info(
            "Checkout payload built",
            extra={"sessions": payload.sessions, "pattern": payload.pattern or ""},
        )
        return payload

    def _next(self, state: WizardState) -> WizardState:
        index = STEP_ORDER.index(state.step)
        if index == len(STEP_ORDER) - 1:
            return state
        if not self.can_proceed(state):
            self._logger.debug("Step incomplete, staying put", extra={"step": state.step.value})
            return state
        return replace(state, step=STEP_ORDER[index + 1])

    def _prev(self, state: WizardState) -> WizardState:
        index = STEP_ORDER.index(state.step)
        if index == 0:
            return state
        return replace(state, step=STEP_ORDER[index - 1])

    def _go_to(self, state: WizardState, target: WizardStep) -> WizardState:
        target_index = STEP_ORDER.index(target)
        if target_index > STEP_ORDER.index(state.step):
            blocked = [s for s in STEP_ORDER[:target_index] if not is_step_complete(s, state.selections)]
            if blocked:
                return state
        return replace(state, step=target)

    def _apply_selection(self, selections: Selections, event: WizardEvent) -> Selections:
        if isinstance(event, SelectPet):
            return replace(selections, pet_id=event.pet_id)
        if isinstance(event, SelectService):
            return replace(selections, service_id=event.service_id, unit_price=event.unit_price)
        if isinstance(event, SelectAddress):
            return replace(selections, address_id=event.address_id)
        if isinstance(event, SetBookingType):
            return replace(selections, booking_type=event.booking_type)
        if isinstance(event, SetStartDate):
            return replace(selections, start_date=event.start_date)
        if isinstance(event, SetTime):
            if event.time is not None and parse_slot(event.time) is None:
                return selections
            return replace(selections, time=event.time)
        if isinstance(event, AddTime):
            times = add_time(selections.times, event.time, self._max_times)
            return selections if times == selections.times else replace(selections, times=times)
        if isinstance(event, RemoveTime):
            times = remove_time(selections.times, event.time)
            return selections if times == selections.times else replace(selections, times=times)
        if isinstance(event, SetPattern):
            return replace(selections, pattern=event.pattern or None)
        if isinstance(event, SetEndDate):
            return replace(selections, end_date=event.end_date)
        return selections

    def _parse_times(self, raw: str | None) -> tuple[str, ...]:
        if not raw:
            return ()
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            self._logger.warning("Failed to parse times", extra={"reason": raw})
            return ()
        if not isinstance(values, list):
            return ()
        return self._normalize_times(str(v) for v in values)

    def _normalize_times(self, values) -> tuple[str, ...]:
        times: tuple[str, ...] = ()
        for value in values:
            times = add_time(times, value, self._max_times)
        return times


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
