from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from salon_booking.application.exceptions import BackendUpstreamError, BookingIncompleteError, NonSelectableDateError
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.application.use_cases.availability import AvailabilityResolver, AvailabilityResult, SlotView
from salon_booking.application.utils.access import is_privileged
from salon_booking.application.utils.calendar_policy import is_selectable_date
from salon_booking.domain.entities.booking import BookingRequest, ExistingBooking
from salon_booking.domain.entities.profile import UserIdentity
from salon_booking.domain.entities.session import BookingSession


@dataclass(frozen=True)
class BookingConfirmation:
    booking: ExistingBooking
    session: BookingSession  # reset session to continue with


@dataclass(frozen=True)
class BookingListItem:
    booking: ExistingBooking
    is_today: bool
    client: UserIdentity | None = None  # filled in for admins only


class BookingUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        resolver: AvailabilityResolver,
        admin_phone_numbers: list[str] | tuple[str, ...] = (),
        identity: IdentityPort | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._admin_phone_numbers = tuple(admin_phone_numbers)
        self._identity = identity
        self._logger = logging.getLogger(__name__)

    def sync_session(self, session: BookingSession) -> BookingSession:
        booking_state = self._resolver.sync_duration(session.booking, session.selection.total_duration_minutes)
        if booking_state is session.booking:
            return session
        return replace(session, booking=booking_state)

    def bookings_for_date(self, day: date) -> list[ExistingBooking]:
        return self._store.fetch_bookings(on_date=day)

    def select_date(self, session: BookingSession, day: date, today: date | None = None) -> BookingSession:
        session = self.sync_session(session)
        booking_state = self._resolver.select_date(
            day,
            session.selection.total_duration_minutes,
            today=today,
        )
        return replace(session, booking=booking_state)

    def availability(self, session: BookingSession) -> tuple[BookingSession, list[SlotView]]:
        session = self.sync_session(session)
        day = session.booking.selected_date
        if day is None:
            raise BookingIncompleteError("Select a date first")
        board = self._resolver.slot_board(
            day,
            session.booking.duration_minutes,
            self.bookings_for_date(day),
            session.booking,
        )
        return session, board

    def choose_time(self, session: BookingSession, requested_time: str) -> tuple[BookingSession, AvailabilityResult]:
        session = self.sync_session(session)
        day = session.booking.selected_date
        bookings = self.bookings_for_date(day) if day is not None else []
        result = self._resolver.choose_time(session.booking, requested_time, bookings)
        return replace(session, booking=result.updated_state), result

    def confirm(self, user_id: str, session: BookingSession, today: date | None = None) -> BookingConfirmation:
        """
        Persist the session's chosen slot run.

        The date must still be open and the run is re-validated against freshly
        fetched bookings first. On any failure the caller's session is left as
        it was.
        """
        if today is None:
            today = date.today()
        session = self.sync_session(session)
        selection = session.selection
        state = session.booking

        if not selection.selected:
            raise BookingIncompleteError("No services selected")
        if state.status != "time_chosen" or state.selected_date is None or state.start_time is None:
            raise BookingIncompleteError("Select a date and time first")
        if not is_selectable_date(state.selected_date, today):
            raise NonSelectableDateError(f"{state.selected_date.isoformat()} is no longer open for booking")

        latest = self.bookings_for_date(state.selected_date)
        run = self._resolver.select_start_time(
            state.selected_date,
            state.start_time,
            state.duration_minutes,
            latest,
        )

        request = BookingRequest(
            user_id=user_id,
            date=state.selected_date,
            start_time=state.start_time,
            duration_minutes=state.duration_minutes,
            occupied_slots_to_reserve=tuple(run),
            services=tuple(selection.service_names),
            total_price=selection.total_price,
        )

        try:
            stored = self._store.insert_booking(request)
        except BackendUpstreamError as e:
            self._logger.error(
                "Error creating booking",
                extra={"user_id": user_id, "session_id": session.session_id, "error": str(e)},
            )
            raise

        self._logger.info(
            "Booking created",
            extra={
                "user_id": user_id,
                "session_id": session.session_id,
                "date": stored.date.isoformat(),
                "start_time": stored.start_time,
            },
        )
        return BookingConfirmation(
            booking=stored,
            session=BookingSession(session_id=session.session_id),
        )

    def list_bookings(self, user: UserIdentity, today: date | None = None) -> list[BookingListItem]:
        """
        Admins see every booking with the client's name and phone, everyone
        else only their own. Newest date first.
        """
        if today is None:
            today = date.today()
        admin = is_privileged(user, self._admin_phone_numbers)
        if admin:
            bookings = self._store.fetch_bookings()
        else:
            bookings = self._store.fetch_bookings(user_id=user.user_id)

        ordered = sorted(bookings, key=lambda b: b.date, reverse=True)
        clients = self._lookup_clients(ordered) if admin else {}
        return [
            BookingListItem(booking=b, is_today=b.date == today, client=clients.get(b.user_id))
            for b in ordered
        ]

    def _lookup_clients(self, bookings: list[ExistingBooking]) -> dict[str, UserIdentity]:
        if self._identity is None:
            return {}
        clients: dict[str, UserIdentity] = {}
        for user_id in dict.fromkeys(b.user_id for b in bookings):
            client = self._identity.get_user(user_id)
            if client is not None:
                clients[user_id] = client
        return clients

    def is_admin(self, user: UserIdentity) -> bool:
        return is_privileged(user, self._admin_phone_numbers)
