from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from petcare.domain.entities.wizard_state import BookingType


@dataclass(frozen=True)
class PriorBooking:
    """Booking fetched from the bookings API as a rebook source."""

    booking_id: str
    pet_id: str | None = None
    service_id: str | None = None
    address_id: str | None = None
    recurring: bool = False
    pattern: str | None = None
    end_date: date | None = None
    time: str | None = None
    times: tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckoutPayload:
    pet_id: str
    service_id: str
    address_id: str
    booking_type: BookingType
    start_date: date
    sessions: int
    total_price: Decimal
    end_date: date | None = None
    pattern: str | None = None
    time: str | None = None
    times: tuple[str, ...] = ()
    rebook_of: str | None = None

    def to_query_params(self) -> dict[str, str]:
        """Encode for the payment page, same keys the booking page round-trips."""
        recurring = self.booking_type is BookingType.RECURRING
        params = {
            "pet": self.pet_id,
            "service": self.service_id,
            "date": self.start_date.isoformat(),
            "address": self.address_id,
            "recurring": "true" if recurring else "false",
        }
        if recurring:
            params["times"] = json.dumps(list(self.times), separators=(",", ":"))
            params["pattern"] = self.pattern or ""
            params["endDate"] = self.end_date.isoformat() if self.end_date else ""
            params["sessions"] = str(self.sessions)
            params["totalPrice"] = _format_amount(self.total_price)
        else:
            params["time"] = self.time or ""
        if self.rebook_of:
            params["rebook"] = "true"
            params["originalBookingId"] = self.rebook_of
        return params


def _format_amount(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value.normalize())
