from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from salon_booking.domain.entities.booking import BookingRequest, ExistingBooking


class BookingStorePort(ABC):
    @abstractmethod
    def fetch_bookings(self, user_id: str | None = None, on_date: date | None = None) -> list[ExistingBooking]:
        """Fetch bookings, optionally restricted to one user and/or one date."""
        raise NotImplementedError

    @abstractmethod
    def insert_booking(self, request: BookingRequest) -> ExistingBooking:
        """Persist a booking. Raises BackendUpstreamError on failure."""
        raise NotImplementedError
