import pytest

from salon_booking.application.use_cases.availability import AvailabilityResolver
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore


@pytest.fixture
def resolver() -> AvailabilityResolver:
    return AvailabilityResolver()


@pytest.fixture
def catalog() -> ServiceCatalogStore:
    return ServiceCatalogStore()
