from __future__ import annotations

from dataclasses import dataclass

from salon_booking.domain.entities.booking_state import BookingState
from salon_booking.domain.entities.selection_state import SelectionState


@dataclass(frozen=True)
class BookingSession:
    session_id: str
    selection: SelectionState = SelectionState()
    booking: BookingState = BookingState()
    updated_at: float | None = None
