from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import httpx

from salon_booking.application.exceptions import BackendContractError, BackendUpstreamError
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.core.config import settings
from salon_booking.domain.entities.booking import BookingRequest, ExistingBooking


class PostgrestBookingStore(BookingStorePort):
    """Bookings table behind a PostgREST endpoint (e.g. a hosted Supabase project)."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        table: str = "bookings",
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BACKEND_URL or "").rstrip("/")
        self._api_key = api_key or settings.BACKEND_ANON_KEY
        self._table = table
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BACKEND_URL is required for the booking backend")
        if not self._api_key:
            raise ValueError("BACKEND_ANON_KEY is required for the booking backend")

    @property
    def _url(self) -> str:
        return f"{self._base_url}/rest/v1/{self._table}"

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
            "Content-Type": "application/json",
        }

    def fetch_bookings(self, user_id: str | None = None, on_date: date | None = None) -> list[ExistingBooking]:
        params = {"select": "*", "order": "date.desc"}
        if user_id is not None:
            params["user_id"] = f"eq.{user_id}"
        if on_date is not None:
            params["date"] = f"eq.{on_date.isoformat()}"

        try:
            response = self._client.get(self._url, params=params, headers=self._headers())
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPError as e:
            self._logger.error("Error fetching bookings", extra={"error": str(e), "user_id": user_id})
            raise BackendUpstreamError(f"Fetching bookings failed: {e}") from e
        except ValueError as e:
            raise BackendContractError(f"Bookings response is not JSON: {e}") from e

        if not isinstance(rows, list):
            raise BackendContractError("Bookings response must be a list")
        return [_row_to_booking(row) for row in rows]

    def insert_booking(self, request: BookingRequest) -> ExistingBooking:
        payload = {
            "user_id": request.user_id,
            "date": request.date.isoformat(),
            "start_time": request.start_time,
            "duration": request.duration_minutes,
            "total_price": request.total_price,
            "time_slots": list(request.occupied_slots_to_reserve),
            "services": list(request.services),
        }
        headers = self._headers()
        headers["Prefer"] = "return=representation"

        try:
            response = self._client.post(self._url, json=[payload], headers=headers)
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPError as e:
            self._logger.error(
                "Error inserting booking",
                extra={"error": str(e), "user_id": request.user_id, "date": request.date.isoformat()},
            )
            raise BackendUpstreamError(f"Inserting booking failed: {e}") from e
        except ValueError as e:
            raise BackendContractError(f"Insert response is not JSON: {e}") from e

        if not isinstance(rows, list) or not rows:
            raise BackendContractError("Insert response did not include the stored row")
        return _row_to_booking(rows[0])


def _row_to_booking(row: dict[str, Any]) -> ExistingBooking:
    try:
        created_at = row.get("created_at")
        return ExistingBooking(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            date=date.fromisoformat(str(row["date"])[:10]),
            start_time=str(row["start_time"]),
            duration_minutes=int(row["duration"]),
            occupied_slots=tuple(row.get("time_slots") or ()),
            services=tuple(row.get("services") or ()),
            total_price=row.get("total_price") or 0,
            created_at=datetime.fromisoformat(created_at.replace("Z", "+00:00")) if created_at else None,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BackendContractError(f"Malformed booking row: {e}") from e
