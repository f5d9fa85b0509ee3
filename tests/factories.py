from datetime import date

from salon_booking.domain.entities.booking import ExistingBooking

# Wednesday
BOOKING_DAY = date(2024, 1, 24)


def make_booking(
    day: date = BOOKING_DAY,
    slots: tuple[str, ...] = ("2:00 PM", "2:30 PM"),
    user_id: str = "user_other",
    booking_id: str = "b1",
) -> ExistingBooking:
    return ExistingBooking(
        id=booking_id,
        user_id=user_id,
        date=day,
        start_time=slots[0],
        duration_minutes=30 * len(slots),
        occupied_slots=slots,
        services=("Shellac manicure",),
        total_price=30,
    )
