from __future__ import annotations

import math

from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.domain.entities.time_slot import TimeSlot

DEFAULT_BUSINESS_HOURS = BusinessHours()


def generate_slots(business_hours: BusinessHours | None = None) -> list[TimeSlot]:
    """Ordered catalog of bookable slots for a business day."""
    hours = business_hours or DEFAULT_BUSINESS_HOURS
    start = hours.open_hour * 60
    end = hours.close_hour * 60
    return [
        TimeSlot(hour=minutes // 60, minute=minutes % 60)
        for minutes in range(start, end, hours.granularity_minutes)
    ]


def slot_labels(slots: list[TimeSlot]) -> list[str]:
    return [slot.label for slot in slots]


def slots_needed(duration_minutes: int, granularity_minutes: int = 30) -> int:
    if duration_minutes <= 0:
        return 0
    return math.ceil(duration_minutes / granularity_minutes)
