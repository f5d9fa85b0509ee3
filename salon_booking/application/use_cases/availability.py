from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date

from salon_booking.application.exceptions import (
    DurationUnset,
    InsufficientTrailingCapacity,
    NonSelectableDateError,
    SlotConflict,
    SlotNotFound,
    SlotSelectionError,
)
from salon_booking.application.utils.calendar_policy import is_selectable_date
from salon_booking.application.utils.slot_generator import generate_slots, slots_needed
from salon_booking.domain.entities.booking import ExistingBooking
from salon_booking.domain.entities.booking_state import BookingState
from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.domain.entities.time_slot import TimeSlot


@dataclass(frozen=True)
class SlotView:
    time: str
    booked: bool
    disabled: bool
    selected: bool


@dataclass(frozen=True)
class AvailabilityResult:
    action: str  # "time_chosen", "declined"
    updated_state: BookingState
    rejection: str | None = None


class AvailabilityResolver:
    """Reconcile requested start times against existing bookings for a day."""

    def __init__(self, business_hours: BusinessHours | None = None) -> None:
        self._business_hours = business_hours or BusinessHours()
        self._slots = generate_slots(self._business_hours)
        self._logger = logging.getLogger(__name__)

    @property
    def slot_catalog(self) -> list[TimeSlot]:
        return list(self._slots)

    @property
    def granularity_minutes(self) -> int:
        return self._business_hours.granularity_minutes

    def is_slot_booked(self, day: date, time: str, bookings: Iterable[ExistingBooking]) -> bool:
        return any(booking.date == day and time in booking.occupied_slots for booking in bookings)

    def select_start_time(
        self,
        day: date,
        requested_time: str,
        duration_minutes: int,
        bookings: Iterable[ExistingBooking],
        catalog: list[TimeSlot] | None = None,
    ) -> list[str]:
        """
        Compute the contiguous run of slot labels to reserve.
        All-or-nothing: raises a SlotSelectionError subclass instead of
        returning a partial run.
        """
        labels = [slot.label for slot in (catalog if catalog is not None else self._slots)]
        try:
            start_index = labels.index(requested_time)
        except ValueError:
            raise SlotNotFound(f"{requested_time} is not an offered slot") from None

        needed = slots_needed(duration_minutes, self.granularity_minutes)
        if needed == 0:
            raise DurationUnset("No service selected")

        if start_index + needed > len(labels):
            raise InsufficientTrailingCapacity(
                f"{duration_minutes} min starting at {requested_time} runs past closing time"
            )

        run = labels[start_index : start_index + needed]
        bookings = list(bookings)
        taken = [label for label in run if self.is_slot_booked(day, label, bookings)]
        if taken:
            raise SlotConflict(f"Already booked: {', '.join(taken)}")
        return run

    def select_date(
        self,
        day: date,
        duration_minutes: int,
        today: date | None = None,
    ) -> BookingState:
        if today is None:
            today = date.today()
        if not is_selectable_date(day, today):
            raise NonSelectableDateError(f"{day.isoformat()} is not open for booking")
        return BookingState(status="date_selected", selected_date=day, duration_minutes=duration_minutes)

    def sync_duration(self, state: BookingState, duration_minutes: int) -> BookingState:
        """A changed duration drops any chosen time."""
        if state.duration_minutes == duration_minutes:
            return state
        if state.selected_date is None:
            return BookingState(duration_minutes=duration_minutes)
        return BookingState(
            status="date_selected",
            selected_date=state.selected_date,
            duration_minutes=duration_minutes,
        )

    def choose_time(
        self,
        state: BookingState,
        requested_time: str,
        bookings: Iterable[ExistingBooking],
    ) -> AvailabilityResult:
        """
        Apply a requested start time to the state.
        A rejected request leaves the chosen time untouched and only records
        why it was declined.
        """
        if state.selected_date is None:
            return AvailabilityResult(
                action="declined",
                updated_state=replace(state, last_rejection="no_date"),
                rejection="no_date",
            )

        try:
            run = self.select_start_time(
                state.selected_date,
                requested_time,
                state.duration_minutes,
                bookings,
            )
        except SlotSelectionError as e:
            self._logger.info(
                "Time selection declined",
                extra={
                    "date": state.selected_date.isoformat(),
                    "start_time": requested_time,
                    "reason": e.kind,
                },
            )
            return AvailabilityResult(
                action="declined",
                updated_state=replace(state, last_rejection=e.kind),
                rejection=e.kind,
            )

        return AvailabilityResult(
            action="time_chosen",
            updated_state=BookingState(
                status="time_chosen",
                selected_date=state.selected_date,
                duration_minutes=state.duration_minutes,
                start_time=requested_time,
                reserved_slots=tuple(run),
            ),
        )

    def slot_board(
        self,
        day: date,
        duration_minutes: int,
        bookings: Iterable[ExistingBooking],
        state: BookingState | None = None,
    ) -> list[SlotView]:
        """Per-slot view for rendering. Without a duration every slot is disabled."""
        bookings = list(bookings)
        reserved = set(state.reserved_slots) if state and state.selected_date == day else set()
        board: list[SlotView] = []
        for slot in self._slots:
            booked = self.is_slot_booked(day, slot.label, bookings)
            board.append(
                SlotView(
                    time=slot.label,
                    booked=booked,
                    disabled=duration_minutes <= 0 or booked,
                    selected=slot.label in reserved,
                )
            )
        return board
