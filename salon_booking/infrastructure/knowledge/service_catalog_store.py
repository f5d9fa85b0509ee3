from __future__ import annotations

from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.utils.pricing import parse_price
from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry
from salon_booking.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: list[ServiceCatalogEntry] | None = None) -> None:
        entries = list(catalog if catalog is not None else SERVICE_CATALOG)
        self._by_name: dict[str, ServiceCatalogEntry] = {}
        for entry in entries:
            if entry.name in self._by_name:
                raise ValueError(f"Duplicate service name: {entry.name!r}")
            if entry.duration_minutes <= 0:
                raise ValueError(f"Service {entry.name!r} must have a positive duration")
            parse_price(entry.price)
            self._by_name[entry.name] = entry
        self._entries = entries

    def list_services(self) -> list[ServiceCatalogEntry]:
        return list(self._entries)

    def get_service(self, name: str) -> ServiceCatalogEntry | None:
        return self._by_name.get(name.strip())

    def categories(self) -> dict[str, list[ServiceCatalogEntry]]:
        grouped: dict[str, list[ServiceCatalogEntry]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.category, []).append(entry)
        return grouped
