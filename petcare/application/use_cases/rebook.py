from __future__ import annotations

import logging
from decimal import Decimal

from petcare.application.exceptions import BookingSourceError
from petcare.application.ports.booking_source import BookingSourcePort
from petcare.application.ports.service_catalog import ServiceCatalogPort
from petcare.application.use_cases.booking_wizard import BookingWizardUseCase
from petcare.domain.entities.wizard_state import WizardState


class RebookUseCase:
    """Start a new booking pre-filled from an earlier one."""

    def __init__(
        self,
        bookings: BookingSourcePort,
        catalog: ServiceCatalogPort,
        wizard: BookingWizardUseCase,
    ) -> None:
        self._bookings = bookings
        self._catalog = catalog
        self._wizard = wizard
        self._logger = logging.getLogger(__name__)

    def execute(self, booking_id: str) -> WizardState:
        try:
            booking = self._bookings.get_booking(booking_id)
        except BookingSourceError as e:
            # Let the user fill the form manually
            self._logger.warning("Rebook source unavailable", extra={"booking_id": booking_id, "error": str(e)})
            return self._wizard.blank_state()

        if booking is None:
            self._logger.info("Rebook source not found", extra={"booking_id": booking_id})
            return self._wizard.blank_state()

        return self._wizard.from_prior_booking(booking, unit_price=self.unit_price(booking.service_id))

    def unit_price(self, service_id: str | None) -> Decimal:
        if not service_id:
            return Decimal("0")
        try:
            price = self._catalog.get_unit_price(service_id)
        except BookingSourceError as e:
            self._logger.warning("Service price unavailable", extra={"error": str(e)})
            return Decimal("0")
        return price if price is not None else Decimal("0")
