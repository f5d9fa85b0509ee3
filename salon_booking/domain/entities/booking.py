from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ExistingBooking:
    id: str
    user_id: str
    date: date
    start_time: str
    duration_minutes: int
    occupied_slots: tuple[str, ...]
    services: tuple[str, ...] = ()
    total_price: int | float = 0
    created_at: datetime | None = None


@dataclass(frozen=True)
class BookingRequest:
    user_id: str
    date: date
    start_time: str
    duration_minutes: int
    occupied_slots_to_reserve: tuple[str, ...]
    services: tuple[str, ...]
    total_price: int | float
