from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[ServiceCatalogEntry]:
        """All services in menu order."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, name: str) -> ServiceCatalogEntry | None:
        """Get service catalog entry by its unique name."""
        raise NotImplementedError
