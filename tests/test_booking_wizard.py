"""
Tests for the booking wizard state machine.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from petcare.application.use_cases.booking_wizard import (
    BookingWizardUseCase,
    is_step_complete,
    progress,
    session_pricing,
)
from petcare.domain.entities.booking import PriorBooking
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
)
from petcare.domain.entities.wizard_state import (
    BookingType,
    Selections,
    WizardPhase,
    WizardState,
    WizardStep,
)


@pytest.fixture
def wizard() -> BookingWizardUseCase:
    return BookingWizardUseCase(max_times_per_day=4)


def _run(wizard, state, *events):
    for event in events:
        state = wizard.reduce(state, event)
    return state


def _recurring_at_schedule(wizard, end_date=date(2024, 1, 15)):
    return _run(
        wizard,
        wizard.blank_state(),
        SelectPet("pet-1"),
        Next(),
        SelectService("dog-walking", Decimal("300")),
        Next(),
        SelectAddress("addr-1"),
        Next(),
        SetBookingType(BookingType.RECURRING),
        SetStartDate(date(2024, 1, 1)),
        AddTime("18:00"),
        AddTime("07:00"),
        SetPattern("weekly_1_monday,wednesday"),
        SetEndDate(end_date),
    )


def test_blank_state_starts_on_pet(wizard):
    state = wizard.blank_state()
    assert state.step is WizardStep.PET
    assert state.phase is WizardPhase.SETUP
    assert progress(state) == 0


def test_next_is_gated_on_current_step(wizard):
    """Next is a no-op until the current step is complete."""
    state = wizard.reduce(wizard.blank_state(), Next())
    assert state.step is WizardStep.PET

    state = _run(wizard, state, SelectPet("pet-1"), Next())
    assert state.step is WizardStep.SERVICE

    state = wizard.reduce(state, Next())
    assert state.step is WizardStep.SERVICE


def test_prev_is_never_gated(wizard):
    state = WizardState(step=WizardStep.SCHEDULE)
    state = _run(wizard, state, Prev(), Prev())
    assert state.step is WizardStep.SERVICE
    state = _run(wizard, state, Prev(), Prev())
    assert state.step is WizardStep.PET


def test_reduce_does_not_mutate_input(wizard):
    state = wizard.blank_state()
    wizard.reduce(state, SelectPet("pet-1"))
    assert state.selections.pet_id is None


def test_one_time_schedule_needs_date_and_time(wizard):
    selections = Selections(start_date=date(2024, 1, 1))
    assert not is_step_complete(WizardStep.SCHEDULE, selections)
    assert is_step_complete(WizardStep.SCHEDULE, replace(selections, time="10:00"))


def test_invalid_single_time_is_ignored(wizard):
    state = wizard.reduce(wizard.blank_state(), SetTime("25:00"))
    assert state.selections.time is None


def test_recurring_schedule_completes_and_prices(wizard):
    state = _recurring_at_schedule(wizard)
    assert state.step is WizardStep.SCHEDULE
    assert state.phase is WizardPhase.DETAILS
    assert state.selections.times == ("07:00", "18:00")
    assert wizard.can_proceed(state)

    pricing = session_pricing(state.selections)
    assert pricing.total_sessions == 10
    assert pricing.total_price == Decimal("3000")

    state = wizard.reduce(state, Next())
    assert state.step is WizardStep.REVIEW
    assert progress(state) == 100


def test_recurring_schedule_blocked_when_nothing_generated(wizard):
    """A valid pattern whose range ends before the first matching weekday blocks progress."""
    # Thursday to Sunday holds no Monday or Wednesday
    state = _run(
        wizard,
        _recurring_at_schedule(wizard),
        SetStartDate(date(2024, 1, 4)),
        SetEndDate(date(2024, 1, 7)),
    )
    assert session_pricing(state.selections).total_sessions == 0
    assert not wizard.can_proceed(state)
    assert wizard.reduce(state, Next()).step is WizardStep.SCHEDULE

    # end on or before start
    assert not wizard.can_proceed(wizard.reduce(state, SetEndDate(date(2024, 1, 4))))


def test_recurring_schedule_needs_recognized_pattern_and_times(wizard):
    state = _recurring_at_schedule(wizard)
    assert not wizard.can_proceed(wizard.reduce(state, SetPattern("weekends")))
    assert not wizard.can_proceed(_run(wizard, state, RemoveTime("07:00"), RemoveTime("18:00")))
    assert not wizard.can_proceed(wizard.reduce(state, SetEndDate(None)))


def test_time_list_is_capped(wizard):
    state = _run(
        wizard,
        wizard.blank_state(),
        AddTime("06:00"),
        AddTime("09:00"),
        AddTime("12:00"),
        AddTime("15:00"),
        AddTime("18:00"),
    )
    assert state.selections.times == ("06:00", "09:00", "12:00", "15:00")


def test_progress_counts_completed_steps_up_to_current(wizard):
    state = _run(wizard, wizard.blank_state(), SelectPet("pet-1"), Next())
    assert progress(state) == 20
    state = wizard.reduce(state, SelectService("grooming", Decimal("799.50")))
    assert progress(state) == 40
    # completion of later steps is not counted
    state = wizard.reduce(state, SelectAddress("addr-1"))
    assert progress(state) == 40


def test_go_to_moves_back_freely_but_not_past_incomplete_steps(wizard):
    state = _run(wizard, wizard.blank_state(), SelectPet("pet-1"), Next())
    assert wizard.reduce(state, GoTo(WizardStep.REVIEW)).step is WizardStep.SERVICE
    assert wizard.reduce(state, GoTo(WizardStep.PET)).step is WizardStep.PET

    state = _run(wizard, state, SelectService("grooming"), SelectAddress("addr-1"))
    assert wizard.reduce(state, GoTo(WizardStep.SCHEDULE)).step is WizardStep.SCHEDULE


def test_restore_from_query_lands_on_review(wizard):
    params = {
        "pet": "pet-1",
        "service": "dog-walking",
        "date": "2024-01-01",
        "address": "addr-1",
        "recurring": "true",
        "times": '["18:00","07:00"]',
        "pattern": "weekly_1_monday,wednesday",
        "endDate": "2024-01-15",
    }
    state = wizard.restore_from_query(params, unit_price=Decimal("300"))

    assert state.step is WizardStep.REVIEW
    assert state.selections.booking_type is BookingType.RECURRING
    assert state.selections.times == ("07:00", "18:00")
    assert state.selections.end_date == date(2024, 1, 15)
    assert session_pricing(state.selections).total_price == Decimal("3000")


def test_restore_skips_existing_bookings_and_partial_params(wizard):
    assert wizard.restore_from_query({"pet": "p", "service": "s"}).step is WizardStep.PET
    existing = {"pet": "p", "service": "s", "date": "2024-01-01", "bookingId": "42"}
    assert wizard.restore_from_query(existing) == wizard.blank_state()


def test_restore_tolerates_malformed_times(wizard):
    params = {"pet": "p", "service": "s", "date": "2024-01-01", "recurring": "true", "times": "[oops"}
    assert wizard.restore_from_query(params).selections.times == ()


def test_from_prior_booking_lands_on_schedule(wizard):
    booking = PriorBooking(
        booking_id="b-7",
        pet_id="pet-1",
        service_id="grooming",
        address_id="addr-1",
        time="10:00",
    )
    state = wizard.from_prior_booking(booking, unit_price=Decimal("799.50"))
    assert state.step is WizardStep.SCHEDULE
    assert state.rebook_of == "b-7"
    assert state.selections.time == "10:00"
    assert state.selections.start_date is None
    assert not wizard.can_proceed(state)


def test_build_checkout_recurring(wizard):
    state = wizard.reduce(_recurring_at_schedule(wizard), Next())
    payload = wizard.build_checkout(state)

    assert payload.sessions == 10
    assert payload.total_price == Decimal("3000")
    assert payload.to_query_params() == {
        "pet": "pet-1",
        "service": "dog-walking",
        "date": "2024-01-01",
        "address": "addr-1",
        "recurring": "true",
        "times": '["07:00","18:00"]',
        "pattern": "weekly_1_monday,wednesday",
        "endDate": "2024-01-15",
        "sessions": "10",
        "totalPrice": "3000",
    }


def test_checkout_query_restores_the_same_booking(wizard):
    state = wizard.reduce(_recurring_at_schedule(wizard), Next())
    restored = wizard.restore_from_query(
        wizard.build_checkout(state).to_query_params(),
        unit_price=Decimal("300"),
    )
    assert restored.selections == state.selections


def test_build_checkout_one_time_rebook(wizard):
    state = WizardState(
        step=WizardStep.REVIEW,
        selections=Selections(
            pet_id="pet-2",
            service_id="grooming",
            unit_price=Decimal("799.50"),
            address_id="addr-1",
            start_date=date(2024, 5, 4),
            time="10:00",
        ),
        rebook_of="b-7",
    )
    params = wizard.build_checkout(state).to_query_params()
    assert params["recurring"] == "false"
    assert params["time"] == "10:00"
    assert params["rebook"] == "true"
    assert params["originalBookingId"] == "b-7"
    assert "sessions" not in params
    assert wizard.build_checkout(state).total_price == Decimal("799.50")


def test_build_checkout_rejects_incomplete_state(wizard):
    with pytest.raises(ValueError):
        wizard.build_checkout(_recurring_at_schedule(wizard))
    with pytest.raises(ValueError):
        wizard.build_checkout(WizardState(step=WizardStep.REVIEW))
