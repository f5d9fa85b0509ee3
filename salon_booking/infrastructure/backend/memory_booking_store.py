from __future__ import annotations

import logging
import uuid
from datetime import date, datetime

from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.domain.entities.booking import BookingRequest, ExistingBooking


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: list[ExistingBooking] | None = None) -> None:
        self._bookings: list[ExistingBooking] = list(bookings or [])
        self._logger = logging.getLogger(__name__)

    def fetch_bookings(self, user_id: str | None = None, on_date: date | None = None) -> list[ExistingBooking]:
        return [
            booking
            for booking in self._bookings
            if (user_id is None or booking.user_id == user_id) and (on_date is None or booking.date == on_date)
        ]

    def insert_booking(self, request: BookingRequest) -> ExistingBooking:
        booking = ExistingBooking(
            id=str(uuid.uuid4()),
            user_id=request.user_id,
            date=request.date,
            start_time=request.start_time,
            duration_minutes=request.duration_minutes,
            occupied_slots=tuple(request.occupied_slots_to_reserve),
            services=tuple(request.services),
            total_price=request.total_price,
            created_at=datetime.now(),
        )
        self._bookings.append(booking)
        self._logger.info(
            "Memory booking stored",
            extra={"booking_id": booking.id, "date": booking.date.isoformat(), "start_time": booking.start_time},
        )
        return booking
