"""
Tests for time slot lists and advance-booking rules.
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from petcare.application.utils.time_slots import add_time, check_time_slot, parse_slot, remove_time

IST = ZoneInfo("Asia/Kolkata")


def test_parse_slot():
    assert parse_slot("07:30").hour == 7
    assert parse_slot(" 23:59 ").minute == 59
    for bad in ("7:30", "24:00", "12:60", "noon", ""):
        assert parse_slot(bad) is None, bad


def test_add_time_keeps_sorted_unique_and_capped():
    times: tuple[str, ...] = ()
    for value in ("18:00", "07:00", "07:00", "bad", "12:15", "09:45", "20:00"):
        times = add_time(times, value, max_times=4)
    assert times == ("07:00", "09:45", "12:15", "18:00")


def test_remove_time():
    assert remove_time(("07:00", "18:00"), "07:00") == ("18:00",)
    assert remove_time(("07:00",), "08:00") == ("07:00",)


def test_morning_slot_needs_booking_by_previous_evening():
    service_day = date(2024, 3, 10)
    before_cutoff = datetime(2024, 3, 9, 19, 59, tzinfo=IST)
    after_cutoff = datetime(2024, 3, 9, 20, 1, tzinfo=IST)

    assert check_time_slot(service_day, "08:00", IST, now=before_cutoff).is_bookable
    late = check_time_slot(service_day, "08:00", IST, now=after_cutoff)
    assert not late.is_bookable
    assert "8 PM the day before" in late.reason


def test_evening_slot_needs_four_hours_notice():
    service_day = date(2024, 3, 10)
    assert check_time_slot(service_day, "18:00", IST, now=datetime(2024, 3, 10, 13, 30, tzinfo=IST)).is_bookable
    late = check_time_slot(service_day, "18:00", IST, now=datetime(2024, 3, 10, 14, 30, tzinfo=IST))
    assert not late.is_bookable
    assert "4 hours" in late.reason


def test_slot_outside_service_hours():
    check = check_time_slot(date(2024, 3, 10), "23:00", IST, now=datetime(2024, 3, 1, 9, 0, tzinfo=IST))
    assert not check.is_bookable
    assert "between 5 AM and 10 PM" in check.reason


def test_naive_now_is_read_in_business_timezone():
    assert check_time_slot(date(2024, 3, 10), "15:00", IST, now=datetime(2024, 3, 10, 10, 0)).is_bookable
