import json
from datetime import date

import httpx
import pytest

from salon_booking.application.exceptions import BackendContractError, BackendUpstreamError
from salon_booking.domain.entities.booking import BookingRequest
from salon_booking.infrastructure.backend.postgrest_booking_store import PostgrestBookingStore
from salon_booking.infrastructure.identity.identity_client import IdentityProviderClient

ROW = {
    "id": 7,
    "user_id": "user_1",
    "date": "2024-01-24",
    "start_time": "3:00 PM",
    "duration": 90,
    "total_price": 50,
    "time_slots": ["3:00 PM", "3:30 PM", "4:00 PM"],
    "services": ["New set GEL-X Short/Medium"],
    "created_at": "2024-01-20T10:00:00Z",
}


def _store(handler) -> PostgrestBookingStore:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return PostgrestBookingStore(base_url="https://db.example.com", api_key="anon", client=client)


def test_fetch_bookings_filters_by_user_and_date():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[ROW])

    bookings = _store(handler).fetch_bookings(user_id="user_1", on_date=date(2024, 1, 24))

    request = seen[0]
    assert request.url.path == "/rest/v1/bookings"
    assert request.url.params["user_id"] == "eq.user_1"
    assert request.url.params["date"] == "eq.2024-01-24"
    assert request.headers["apikey"] == "anon"
    assert bookings[0].id == "7"
    assert bookings[0].occupied_slots == ("3:00 PM", "3:30 PM", "4:00 PM")
    assert bookings[0].duration_minutes == 90


def test_insert_booking_sends_record_shape():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        captured["prefer"] = request.headers.get("Prefer")
        return httpx.Response(201, json=[ROW])

    stored = _store(handler).insert_booking(
        BookingRequest(
            user_id="user_1",
            date=date(2024, 1, 24),
            start_time="3:00 PM",
            duration_minutes=90,
            occupied_slots_to_reserve=("3:00 PM", "3:30 PM", "4:00 PM"),
            services=("New set GEL-X Short/Medium",),
            total_price=50,
        )
    )

    assert captured["prefer"] == "return=representation"
    assert captured["body"] == [
        {
            "user_id": "user_1",
            "date": "2024-01-24",
            "start_time": "3:00 PM",
            "duration": 90,
            "total_price": 50,
            "time_slots": ["3:00 PM", "3:30 PM", "4:00 PM"],
            "services": ["New set GEL-X Short/Medium"],
        }
    ]
    assert stored.start_time == "3:00 PM"


def test_backend_errors_are_wrapped():
    store = _store(lambda request: httpx.Response(503, json={"message": "down"}))

    with pytest.raises(BackendUpstreamError):
        store.fetch_bookings()


def test_malformed_rows_are_rejected():
    store = _store(lambda request: httpx.Response(200, json=[{"id": 1}]))

    with pytest.raises(BackendContractError):
        store.fetch_bookings()


def test_store_requires_credentials():
    with pytest.raises(ValueError):
        PostgrestBookingStore(base_url="https://db.example.com", api_key="", client=httpx.Client())


def test_identity_client_reads_first_phone_number():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/users/missing"):
            return httpx.Response(404, json={})
        assert request.headers["Authorization"] == "Bearer sk_test"
        return httpx.Response(
            200,
            json={
                "id": "user_1",
                "first_name": "Kate",
                "last_name": "Lee",
                "phone_numbers": [{"phone_number": "+12015550100"}],
            },
        )

    client = IdentityProviderClient(
        secret_key="sk_test",
        base_url="https://identity.example.com/v1",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    user = client.get_user("user_1")
    assert user.phone_number == "+12015550100"
    assert user.name == "Kate Lee"
    assert client.get_user("missing") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json=["user_1"]),
    ],
)
def test_identity_client_rejects_unexpected_body(response):
    client = IdentityProviderClient(
        secret_key="sk_test",
        base_url="https://identity.example.com/v1",
        client=httpx.Client(transport=httpx.MockTransport(lambda request: response)),
    )

    with pytest.raises(BackendContractError):
        client.get_user("user_1")


def test_identity_client_wraps_upstream_failure():
    client = IdentityProviderClient(
        secret_key="sk_test",
        base_url="https://identity.example.com/v1",
        client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500))),
    )

    with pytest.raises(BackendUpstreamError):
        client.get_user("user_1")
