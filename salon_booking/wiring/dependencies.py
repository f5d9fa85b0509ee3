from functools import lru_cache
import logging

from salon_booking.core.config import settings
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.ports.session_store import SessionStorePort
from salon_booking.application.use_cases.availability import AvailabilityResolver
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.selection import SelectionUseCase
from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.infrastructure.backend.memory_booking_store import MemoryBookingStore
from salon_booking.infrastructure.backend.postgrest_booking_store import PostgrestBookingStore
from salon_booking.infrastructure.identity.identity_client import IdentityProviderClient
from salon_booking.infrastructure.identity.static_identity import StaticIdentityProvider
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.store.json_store import JsonSessionStore
from salon_booking.infrastructure.store.memory_store import MemorySessionStore


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local", "test"}


@lru_cache
def get_business_hours() -> BusinessHours:
    return BusinessHours(
        open_hour=settings.BUSINESS_OPEN_HOUR,
        close_hour=settings.BUSINESS_CLOSE_HOUR,
        granularity_minutes=settings.SLOT_GRANULARITY_MINUTES,
    )


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_session_store() -> SessionStorePort:
    if settings.SESSION_STORE.lower() == "json":
        return JsonSessionStore(data_dir=settings.SESSION_DATA_DIR)
    return MemorySessionStore()


@lru_cache
def get_booking_store() -> BookingStorePort:
    logger = logging.getLogger(__name__)
    if not settings.BACKEND_URL or not settings.BACKEND_ANON_KEY:
        if _is_local():
            logger.info("Using MemoryBookingStore (backend credentials missing, ENV=%s)", settings.ENV)
            return MemoryBookingStore()
        raise ValueError("BACKEND_URL and BACKEND_ANON_KEY are required outside dev/local.")
    return PostgrestBookingStore()


@lru_cache
def get_identity() -> IdentityPort:
    logger = logging.getLogger(__name__)
    if not settings.IDENTITY_SECRET_KEY:
        if _is_local():
            logger.info("Using StaticIdentityProvider (secret key missing, ENV=%s)", settings.ENV)
            return StaticIdentityProvider()
        raise ValueError("IDENTITY_SECRET_KEY is required outside dev/local.")
    return IdentityProviderClient()


def get_availability_resolver() -> AvailabilityResolver:
    return AvailabilityResolver(get_business_hours())


def get_selection_use_case() -> SelectionUseCase:
    return SelectionUseCase(catalog=get_service_catalog())


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        store=get_booking_store(),
        resolver=get_availability_resolver(),
        admin_phone_numbers=settings.ADMIN_PHONE_NUMBERS,
        identity=get_identity(),
    )
