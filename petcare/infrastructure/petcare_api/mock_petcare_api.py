from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from petcare.application.ports.booking_source import BookingSourcePort
from petcare.application.ports.service_catalog import ServiceCatalogPort
from petcare.domain.entities.booking import PriorBooking

DEFAULT_PRICES: dict[str, Decimal] = {
    "dog-walking": Decimal("300"),
    "pet-sitting": Decimal("500"),
    "grooming": Decimal("799.50"),
}

DEFAULT_BOOKINGS: dict[str, PriorBooking] = {
    "demo-weekly": PriorBooking(
        booking_id="demo-weekly",
        pet_id="pet-1",
        service_id="dog-walking",
        address_id="addr-1",
        recurring=True,
        pattern="weekly_1_monday,wednesday",
        end_date=date(2024, 1, 31),
        times=("07:00", "18:30"),
    ),
    "demo-once": PriorBooking(
        booking_id="demo-once",
        pet_id="pet-2",
        service_id="grooming",
        address_id="addr-1",
        time="10:00",
    ),
}


class MockPetCareApi(BookingSourcePort, ServiceCatalogPort):
    def __init__(
        self,
        bookings: dict[str, PriorBooking] | None = None,
        prices: dict[str, Decimal] | None = None,
    ) -> None:
        self._bookings = dict(DEFAULT_BOOKINGS if bookings is None else bookings)
        self._prices = dict(DEFAULT_PRICES if prices is None else prices)
        self._logger = logging.getLogger(__name__)

    def get_booking(self, booking_id: str) -> PriorBooking | None:
        booking = self._bookings.get(booking_id)
        self._logger.info("Mock booking lookup", extra={"booking_id": booking_id, "reason": "hit" if booking else "miss"})
        return booking

    def get_unit_price(self, service_id: str) -> Decimal | None:
        return self._prices.get(service_id)
