from functools import lru_cache
import logging

from petcare.core.config import settings
from petcare.application.ports.booking_source import BookingSourcePort
from petcare.application.ports.service_catalog import ServiceCatalogPort
from petcare.application.use_cases.booking_wizard import BookingWizardUseCase
from petcare.application.use_cases.rebook import RebookUseCase
from petcare.infrastructure.petcare_api.mock_petcare_api import MockPetCareApi
from petcare.infrastructure.petcare_api.petcare_client import PetCareApiClient


@lru_cache
def get_petcare_api() -> PetCareApiClient | MockPetCareApi:
    logger = logging.getLogger(__name__)
    if not settings.PETCARE_API_BASE_URL or settings.ENV.lower() in {"dev", "local", "test"}:
        logger.info("Using MockPetCareApi (ENV=%s)", settings.ENV)
        return MockPetCareApi()
    logger.info("Using PetCareApiClient base_url=%s", settings.PETCARE_API_BASE_URL)
    return PetCareApiClient()


def get_booking_source() -> BookingSourcePort:
    return get_petcare_api()


def get_service_catalog() -> ServiceCatalogPort:
    return get_petcare_api()


def get_booking_wizard() -> BookingWizardUseCase:
    return BookingWizardUseCase(max_times_per_day=settings.MAX_TIMES_PER_DAY)


def get_rebook_use_case() -> RebookUseCase:
    return RebookUseCase(
        bookings=get_booking_source(),
        catalog=get_service_catalog(),
        wizard=get_booking_wizard(),
    )
