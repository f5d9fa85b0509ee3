from datetime import date

import pytest

from factories import BOOKING_DAY, make_booking
from salon_booking.application.exceptions import (
    BackendUpstreamError,
    BookingIncompleteError,
    NonSelectableDateError,
    SlotConflict,
)
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.selection import SelectionUseCase
from salon_booking.domain.entities.booking import BookingRequest
from salon_booking.domain.entities.booking_state import BookingState
from salon_booking.domain.entities.profile import UserIdentity
from salon_booking.domain.entities.selection_state import SelectionState
from salon_booking.domain.entities.session import BookingSession
from salon_booking.infrastructure.backend.memory_booking_store import MemoryBookingStore
from salon_booking.infrastructure.identity.static_identity import StaticIdentityProvider

MONDAY = date(2024, 1, 22)
ADMIN = UserIdentity("admin", phone_number="+12015550100")


class FailingInsertStore(MemoryBookingStore):
    def insert_booking(self, request):
        raise BackendUpstreamError("backend unavailable")


def _session_with(catalog, *names: str) -> BookingSession:
    uc = SelectionUseCase(catalog)
    selection = SelectionState()
    for name in names:
        selection = uc.toggle(selection, name).updated_state
    return BookingSession(session_id="s1", selection=selection)


def _chosen(booking_uc: BookingUseCase, session: BookingSession, time: str) -> BookingSession:
    session = booking_uc.select_date(session, BOOKING_DAY, today=MONDAY)
    session, result = booking_uc.choose_time(session, time)
    assert result.action == "time_chosen"
    return session


def test_confirm_persists_booking_and_resets_session(resolver, catalog):
    store = MemoryBookingStore([make_booking()])
    uc = BookingUseCase(store, resolver)
    session = _chosen(uc, _session_with(catalog, "New set GEL-X Short/Medium"), "3:00 PM")

    confirmation = uc.confirm("user_1", session, today=MONDAY)

    booking = confirmation.booking
    assert booking.user_id == "user_1"
    assert booking.date == BOOKING_DAY
    assert booking.start_time == "3:00 PM"
    assert booking.duration_minutes == 90
    assert booking.occupied_slots == ("3:00 PM", "3:30 PM", "4:00 PM")
    assert booking.services == ("New set GEL-X Short/Medium",)
    assert booking.total_price == 50
    assert confirmation.session == BookingSession(session_id="s1")
    assert len(store.fetch_bookings(on_date=BOOKING_DAY)) == 2


def test_confirm_rechecks_latest_bookings(resolver, catalog):
    store = MemoryBookingStore()
    uc = BookingUseCase(store, resolver)
    session = _chosen(uc, _session_with(catalog, "Shellac manicure"), "3:00 PM")

    # another session takes 3:30 PM before this one confirms
    store.insert_booking(
        BookingRequest(
            user_id="user_2",
            date=BOOKING_DAY,
            start_time="3:30 PM",
            duration_minutes=60,
            occupied_slots_to_reserve=("3:30 PM", "4:00 PM"),
            services=("Re-fill Acrylic",),
            total_price=40,
        )
    )

    with pytest.raises(SlotConflict):
        uc.confirm("user_1", session, today=MONDAY)
    assert len(store.fetch_bookings()) == 1


def test_failed_insert_leaves_session_untouched(resolver, catalog):
    uc = BookingUseCase(FailingInsertStore(), resolver)
    session = _chosen(uc, _session_with(catalog, "Shellac manicure"), "3:00 PM")

    with pytest.raises(BackendUpstreamError):
        uc.confirm("user_1", session, today=MONDAY)
    assert session.booking.start_time == "3:00 PM"
    assert session.selection.total_price == 30


def test_confirm_rejects_date_that_has_passed(resolver, catalog):
    store = MemoryBookingStore()
    uc = BookingUseCase(store, resolver)
    session = _chosen(uc, _session_with(catalog, "Shellac manicure"), "3:00 PM")

    with pytest.raises(NonSelectableDateError):
        uc.confirm("user_1", session, today=date(2024, 1, 25))
    assert store.fetch_bookings() == []
    assert session.booking.status == "time_chosen"


def test_confirm_rejects_weekend_session(resolver, catalog):
    store = MemoryBookingStore()
    uc = BookingUseCase(store, resolver)
    saturday = date(2024, 1, 27)
    session = BookingSession(
        session_id="s1",
        selection=_session_with(catalog, "Shellac manicure").selection,
        booking=BookingState(
            status="time_chosen",
            selected_date=saturday,
            duration_minutes=45,
            start_time="3:00 PM",
            reserved_slots=("3:00 PM", "3:30 PM"),
        ),
    )

    with pytest.raises(NonSelectableDateError):
        uc.confirm("user_1", session, today=MONDAY)
    assert store.fetch_bookings() == []


def test_confirm_requires_services_and_time(resolver, catalog):
    uc = BookingUseCase(MemoryBookingStore(), resolver)

    with pytest.raises(BookingIncompleteError):
        uc.confirm("user_1", BookingSession(session_id="s1"), today=MONDAY)

    dated = uc.select_date(_session_with(catalog, "Shellac manicure"), BOOKING_DAY, today=MONDAY)
    with pytest.raises(BookingIncompleteError):
        uc.confirm("user_1", dated, today=MONDAY)


def test_selection_change_drops_chosen_time(resolver, catalog):
    uc = BookingUseCase(MemoryBookingStore(), resolver)
    session = _chosen(uc, _session_with(catalog, "Shellac manicure"), "3:00 PM")

    grown = BookingSession(
        session_id=session.session_id,
        selection=SelectionUseCase(catalog).toggle(session.selection, "Nails Art").updated_state,
        booking=session.booking,
    )
    synced = uc.sync_session(grown)

    assert synced.booking == BookingState(status="date_selected", selected_date=BOOKING_DAY, duration_minutes=60)
    with pytest.raises(BookingIncompleteError):
        uc.confirm("user_1", grown, today=MONDAY)


def test_availability_uses_all_bookings_for_the_date(resolver, catalog):
    store = MemoryBookingStore([make_booking(user_id="someone_else"), make_booking(day=date(2024, 1, 25), slots=("5:00 PM",))])
    uc = BookingUseCase(store, resolver)
    session = uc.select_date(_session_with(catalog, "Shellac manicure"), BOOKING_DAY, today=MONDAY)

    _, board = uc.availability(session)
    booked = [slot.time for slot in board if slot.booked]

    assert booked == ["2:00 PM", "2:30 PM"]


def test_availability_without_services_disables_slots(resolver):
    uc = BookingUseCase(MemoryBookingStore(), resolver)
    session = uc.select_date(BookingSession(session_id="s1"), BOOKING_DAY, today=MONDAY)

    _, board = uc.availability(session)

    assert all(slot.disabled for slot in board)


def test_admin_sees_all_bookings_newest_first(resolver):
    store = MemoryBookingStore(
        [
            make_booking(day=date(2024, 1, 24), user_id="u1", booking_id="b1"),
            make_booking(day=date(2024, 2, 1), user_id="u2", booking_id="b2"),
            make_booking(day=date(2024, 1, 30), user_id="u1", booking_id="b3"),
        ]
    )
    uc = BookingUseCase(store, resolver, admin_phone_numbers=["+12015550100"])

    admin_view = uc.list_bookings(ADMIN, today=date(2024, 1, 30))
    user_view = uc.list_bookings(UserIdentity("u1", phone_number="+12015550111"), today=date(2024, 1, 30))

    assert [item.booking.id for item in admin_view] == ["b2", "b3", "b1"]
    assert [item.booking.id for item in user_view] == ["b3", "b1"]
    assert [item.is_today for item in user_view] == [True, False]
    assert uc.is_admin(ADMIN)


class _FetchFailsStore(BookingStorePort):
    def fetch_bookings(self, user_id=None, on_date=None):
        raise BackendUpstreamError("timeout")

    def insert_booking(self, request):
        raise AssertionError("must not insert")


def test_fetch_failure_propagates(resolver, catalog):
    uc = BookingUseCase(_FetchFailsStore(), resolver)
    session = uc.select_date(_session_with(catalog, "Shellac manicure"), BOOKING_DAY, today=MONDAY)

    with pytest.raises(BackendUpstreamError):
        uc.choose_time(session, "3:00 PM")


def test_admin_list_includes_client_details(resolver):
    store = MemoryBookingStore(
        [
            make_booking(day=date(2024, 1, 24), user_id="u1", booking_id="b1"),
            make_booking(day=date(2024, 1, 30), user_id="u1", booking_id="b2"),
            make_booking(day=date(2024, 2, 1), user_id="u2", booking_id="b3"),
        ]
    )
    lookups: list[str] = []

    class CountingIdentity(StaticIdentityProvider):
        def get_user(self, user_id):
            lookups.append(user_id)
            return super().get_user(user_id)

    identity = CountingIdentity({"u1": UserIdentity("u1", phone_number="+12015550111", name="Kate Lee")})
    uc = BookingUseCase(store, resolver, admin_phone_numbers=["+12015550100"], identity=identity)

    admin_view = uc.list_bookings(ADMIN, today=date(2024, 1, 30))
    user_view = uc.list_bookings(UserIdentity("u1", phone_number="+12015550111"), today=date(2024, 1, 30))

    clients = {item.booking.id: item.client for item in admin_view}
    assert clients["b1"].name == "Kate Lee"
    assert clients["b2"].phone_number == "+12015550111"
    assert clients["b3"].name is None
    assert sorted(lookups) == ["u1", "u2"]
    assert all(item.client is None for item in user_view)
