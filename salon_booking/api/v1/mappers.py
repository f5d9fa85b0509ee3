from __future__ import annotations

from salon_booking.api.v1.schemas import (
    BookingSchema,
    BookingStateSchema,
    SelectedServiceSchema,
    SelectionSchema,
    ServiceSchema,
    SessionSchema,
)
from salon_booking.application.utils.formatting import format_duration
from salon_booking.application.utils.pricing import format_price
from salon_booking.domain.entities.booking import ExistingBooking
from salon_booking.domain.entities.profile import UserIdentity
from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry
from salon_booking.domain.entities.session import BookingSession


def service_to_schema(entry: ServiceCatalogEntry) -> ServiceSchema:
    return ServiceSchema(
        name=entry.name,
        category=entry.category,
        duration_minutes=entry.duration_minutes,
        duration_label=format_duration(entry.duration_minutes),
        price=entry.price,
        price_label=format_price(entry.price),
    )


def session_to_schema(session: BookingSession) -> SessionSchema:
    selection = session.selection
    booking = session.booking
    return SessionSchema(
        session_id=session.session_id,
        selection=SelectionSchema(
            services=selection.services,
            items=[
                SelectedServiceSchema(
                    name=item.name,
                    duration_minutes=item.duration_minutes,
                    price=item.price,
                    price_max=item.price_max,
                )
                for item in selection.selected
            ],
            total_duration_minutes=selection.total_duration_minutes,
            total_duration_label=format_duration(selection.total_duration_minutes),
            total_price=selection.total_price,
            total_price_max=selection.total_price_max,
        ),
        booking=BookingStateSchema(
            status=booking.status,
            selected_date=booking.selected_date,
            duration_minutes=booking.duration_minutes,
            start_time=booking.start_time,
            reserved_slots=list(booking.reserved_slots),
            last_rejection=booking.last_rejection,
        ),
    )


def booking_to_schema(
    booking: ExistingBooking,
    is_today: bool = False,
    client: UserIdentity | None = None,
) -> BookingSchema:
    return BookingSchema(
        id=booking.id,
        user_id=booking.user_id,
        date=booking.date,
        start_time=booking.start_time,
        duration_minutes=booking.duration_minutes,
        duration_label=format_duration(booking.duration_minutes),
        time_slots=list(booking.occupied_slots),
        services=list(booking.services),
        total_price=booking.total_price,
        is_today=is_today,
        client_name=client.name if client else None,
        client_phone=client.phone_number if client else None,
    )
