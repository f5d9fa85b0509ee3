from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BookingState:
    status: str = "no_date"  # "no_date", "date_selected", "time_chosen"
    selected_date: date | None = None
    duration_minutes: int = 0
    start_time: str | None = None  # slot label, e.g. "3:00 PM"
    reserved_slots: tuple[str, ...] = ()
    # kind of the last declined time selection, e.g. "slot_conflict"
    last_rejection: str | None = None
