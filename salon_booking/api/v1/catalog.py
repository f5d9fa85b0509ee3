from datetime import date

from fastapi import APIRouter, Depends

from salon_booking.api.v1.mappers import service_to_schema
from salon_booking.api.v1.schemas import DisabledDatesSchema, ServiceCategorySchema
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.utils.calendar_policy import disabled_dates
from salon_booking.core.config import settings
from salon_booking.wiring.dependencies import get_service_catalog

router = APIRouter()


@router.get("/services", response_model=list[ServiceCategorySchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    grouped: dict[str, ServiceCategorySchema] = {}
    for entry in catalog.list_services():
        section = grouped.setdefault(entry.category, ServiceCategorySchema(category=entry.category))
        section.items.append(service_to_schema(entry))
    return list(grouped.values())


@router.get("/calendar/disabled-dates", response_model=DisabledDatesSchema)
def get_disabled_dates():
    today = date.today()
    return DisabledDatesSchema(
        today=today,
        horizon_days=settings.BOOKING_HORIZON_DAYS,
        dates=disabled_dates(today, settings.BOOKING_HORIZON_DAYS),
    )
