from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Request

from petcare.api.v1.schemas import (
    CheckoutResponseSchema,
    EventType,
    ReduceRequestSchema,
    ScheduleSummarySchema,
    SchedulePreviewRequestSchema,
    SchedulePreviewResponseSchema,
    SelectionsSchema,
    WizardEventSchema,
    WizardResponseSchema,
    WizardStateSchema,
)
from petcare.application.use_cases.booking_wizard import (
    BookingWizardUseCase,
    progress,
    session_pricing,
)
from petcare.application.use_cases.rebook import RebookUseCase
from petcare.application.utils.date_generator import generate
from petcare.application.utils.pattern_parser import describe, parse
from petcare.application.utils.session_aggregator import aggregate
from petcare.application.utils.time_slots import check_time_slot, parse_slot
from petcare.core.config import settings
from petcare.domain.entities import wizard_events as events
from petcare.domain.entities.recurrence import DateRange, Unrecognized
from petcare.domain.entities.wizard_state import BookingType, Selections, WizardState, WizardStep
from petcare.wiring.dependencies import get_booking_wizard, get_rebook_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/schedule/preview", response_model=SchedulePreviewResponseSchema)
def preview_schedule(req: SchedulePreviewRequestSchema):
    pattern = parse(req.pattern)
    dates = generate(pattern, DateRange(req.start_date, req.end_date))
    times = sorted({t for t in req.times if parse_slot(t)})
    pricing = aggregate(dates, len(times), req.unit_price)

    warnings: list[str] = []
    if dates:
        tz = ZoneInfo(settings.BUSINESS_TIMEZONE)
        for slot in times:
            check = check_time_slot(dates[0], slot, tz)
            if not check.is_bookable and check.reason:
                warnings.append(f"{dates[0].isoformat()} {slot}: {check.reason}")

    logger.info("Schedule previewed", extra={"pattern": req.pattern, "sessions": pricing.total_sessions})
    return SchedulePreviewResponseSchema(
        pattern_label=describe(pattern),
        recognized=not isinstance(pattern, Unrecognized),
        session_dates=list(pricing.session_dates),
        sessions_per_day=pricing.sessions_per_day,
        total_sessions=pricing.total_sessions,
        unit_price=pricing.unit_price,
        total_price=pricing.total_price,
        warnings=warnings,
    )


@router.post("/wizard/reduce", response_model=WizardResponseSchema)
def reduce_wizard(
    req: ReduceRequestSchema,
    wizard: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        event = _to_event(req.event)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = wizard.reduce(_to_state(req.state), event)
    return _to_response(state, wizard)


@router.get("/wizard/restore", response_model=WizardResponseSchema)
def restore_wizard(
    request: Request,
    wizard: BookingWizardUseCase = Depends(get_booking_wizard),
    rebook: RebookUseCase = Depends(get_rebook_use_case),
):
    params = dict(request.query_params)
    unit_price = rebook.unit_price(params.get("service"))
    state = wizard.restore_from_query(params, unit_price=unit_price)
    return _to_response(state, wizard)


@router.get("/wizard/rebook/{booking_id}", response_model=WizardResponseSchema)
def rebook_wizard(
    booking_id: str,
    wizard: BookingWizardUseCase = Depends(get_booking_wizard),
    rebook: RebookUseCase = Depends(get_rebook_use_case),
):
    return _to_response(rebook.execute(booking_id), wizard)


@router.post("/checkout", response_model=CheckoutResponseSchema)
def checkout(
    req: WizardStateSchema,
    wizard: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        payload = wizard.build_checkout(_to_state(req))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CheckoutResponseSchema(
        pet_id=payload.pet_id,
        service_id=payload.service_id,
        address_id=payload.address_id,
        booking_type=payload.booking_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        pattern=payload.pattern,
        time=payload.time,
        times=list(payload.times),
        sessions=payload.sessions,
        total_price=payload.total_price,
        rebook_of=payload.rebook_of,
        query=payload.to_query_params(),
    )


def _to_state(schema: WizardStateSchema) -> WizardState:
    s = schema.selections
    return WizardState(
        step=schema.step,
        selections=Selections(
            pet_id=s.pet_id,
            service_id=s.service_id,
            unit_price=s.unit_price,
            address_id=s.address_id,
            booking_type=s.booking_type,
            start_date=s.start_date,
            time=s.time,
            times=tuple(s.times),
            pattern=s.pattern,
            end_date=s.end_date,
        ),
        rebook_of=schema.rebook_of,
    )


def _to_response(state: WizardState, wizard: BookingWizardUseCase) -> WizardResponseSchema:
    s = state.selections
    pricing = session_pricing(s)
    label = describe(parse(s.pattern)) if s.is_recurring else ""
    return WizardResponseSchema(
        state=WizardStateSchema(
            step=state.step,
            selections=SelectionsSchema(
                pet_id=s.pet_id,
                service_id=s.service_id,
                unit_price=s.unit_price,
                address_id=s.address_id,
                booking_type=s.booking_type,
                start_date=s.start_date,
                time=s.time,
                times=list(s.times),
                pattern=s.pattern,
                end_date=s.end_date,
            ),
            rebook_of=state.rebook_of,
        ),
        phase=state.phase,
        progress=progress(state),
        can_proceed=wizard.can_proceed(state),
        schedule=ScheduleSummarySchema(
            pattern_label=label,
            session_dates=list(pricing.session_dates),
            sessions_per_day=pricing.sessions_per_day,
            total_sessions=pricing.total_sessions,
            unit_price=pricing.unit_price,
            total_price=pricing.total_price,
        ),
    )


def _to_event(schema: WizardEventSchema) -> events.WizardEvent:
    value = schema.value
    if schema.type is EventType.select_pet:
        return events.SelectPet(value)
    if schema.type is EventType.select_service:
        return events.SelectService(value, schema.unit_price if schema.unit_price is not None else Decimal("0"))
    if schema.type is EventType.select_address:
        return events.SelectAddress(value)
    if schema.type is EventType.set_booking_type:
        return events.SetBookingType(BookingType(value))
    if schema.type is EventType.set_start_date:
        return events.SetStartDate(_to_date(value))
    if schema.type is EventType.set_time:
        return events.SetTime(value)
    if schema.type is EventType.add_time:
        return events.AddTime(value or "")
    if schema.type is EventType.remove_time:
        return events.RemoveTime(value or "")
    if schema.type is EventType.set_pattern:
        return events.SetPattern(value)
    if schema.type is EventType.set_end_date:
        return events.SetEndDate(_to_date(value))
    if schema.type is EventType.next:
        return events.Next()
    if schema.type is EventType.prev:
        return events.Prev()
    return events.GoTo(WizardStep(value))


def _to_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None
