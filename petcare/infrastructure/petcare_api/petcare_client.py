from __future__ import annotations

import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from petcare.application.exceptions import BookingSourceError
from petcare.application.ports.booking_source import BookingSourcePort
from petcare.application.ports.service_catalog import ServiceCatalogPort
from petcare.core.config import settings
from petcare.domain.entities.booking import PriorBooking


class PetCareApiClient(BookingSourcePort, ServiceCatalogPort):
    """Reads bookings and services from the pet-care web API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.PETCARE_API_BASE_URL or "").rstrip("/")
        self._token = token or settings.PETCARE_API_TOKEN
        self._client = client or httpx.Client(timeout=timeout or settings.PETCARE_API_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("PETCARE_API_BASE_URL is required for the pet-care API client")

    def get_booking(self, booking_id: str) -> PriorBooking | None:
        try:
            response = self._client.get(f"{self._base_url}/api/bookings/{booking_id}", headers=self._headers())
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error fetching booking", extra={"booking_id": booking_id, "error": str(e)})
            raise BookingSourceError(f"Failed to fetch booking {booking_id}") from e

        if not isinstance(data, dict):
            raise BookingSourceError(f"Unexpected booking payload for {booking_id}")
        return _booking_from_payload(booking_id, data)

    def get_unit_price(self, service_id: str) -> Decimal | None:
        try:
            response = self._client.get(f"{self._base_url}/api/services", headers=self._headers())
            response.raise_for_status()
            services = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error fetching services", extra={"error": str(e)})
            raise BookingSourceError("Failed to fetch services") from e

        for service in services if isinstance(services, list) else []:
            if str(service.get("id")) == str(service_id):
                return _to_price(service.get("price"))
        return None

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}


def _booking_from_payload(booking_id: str, data: dict[str, Any]) -> PriorBooking:
    times = data.get("times") or []
    if isinstance(times, str):
        # stored as a JSON-encoded list
        try:
            times = json.loads(times)
        except json.JSONDecodeError:
            times = []

    return PriorBooking(
        booking_id=str(data.get("id") or booking_id),
        pet_id=_to_id(data.get("petId")),
        service_id=_to_id(data.get("serviceId")),
        address_id=_to_id(data.get("addressId")),
        recurring=bool(data.get("recurring")),
        pattern=data.get("recurringPattern") or None,
        end_date=_to_date(data.get("recurringEndDate")),
        time=data.get("time") or None,
        times=tuple(str(t) for t in times) if isinstance(times, list) else (),
    )


def _to_id(value: Any) -> str | None:
    return None if value is None else str(value)


def _to_date(value: Any) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _to_price(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None
