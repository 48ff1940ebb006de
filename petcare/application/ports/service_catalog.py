from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_unit_price(self, service_id: str) -> Decimal | None:
        """Price of one session of the service, None if the service is unknown."""
        raise NotImplementedError
