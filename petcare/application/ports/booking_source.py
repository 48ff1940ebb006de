from __future__ import annotations

from abc import ABC, abstractmethod

from petcare.domain.entities.booking import PriorBooking


class BookingSourcePort(ABC):
    @abstractmethod
    def get_booking(self, booking_id: str) -> PriorBooking | None:
        """Fetch a past booking to rebook from. Returns None if it does not exist."""
        raise NotImplementedError
