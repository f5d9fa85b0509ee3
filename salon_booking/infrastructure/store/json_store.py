from __future__ import annotations

import json
import logging
import re
import threading
import time
import uuid
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any

from salon_booking.application.exceptions import InvalidSessionIdError
from salon_booking.application.ports.session_store import SessionStorePort
from salon_booking.domain.entities.booking_state import BookingState
from salon_booking.domain.entities.selection_state import SelectedService, SelectionState
from salon_booking.domain.entities.session import BookingSession

_SESSION_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


class JsonSessionStore(SessionStorePort):
    """One JSON file per booking session, written atomically."""

    def __init__(self, data_dir: str = "./data/sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        if not _SESSION_ID_RE.fullmatch(session_id or ""):
            raise InvalidSessionIdError(f"Invalid session id: {session_id!r}")
        return self._data_dir / f"{session_id}.json"

    def get_or_create(self, session_id: str | None) -> BookingSession:
        if session_id:
            existing = self.get(session_id)
            if existing is not None:
                return existing
        session = BookingSession(session_id=session_id or str(uuid.uuid4()), updated_at=time.time())
        self.save(session)
        return session

    def get(self, session_id: str) -> BookingSession | None:
        file_path = self._get_file_path(session_id)
        with self._get_lock(session_id):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                # A corrupted file starts the session over
                self._logger.warning("Unreadable session file", extra={"session_id": session_id, "error": str(e)})
                return None
        try:
            return self._deserialize_session(data)
        except (KeyError, TypeError, AttributeError) as e:
            self._logger.warning("Malformed session file", extra={"session_id": session_id, "error": str(e)})
            return None

    def save(self, session: BookingSession) -> None:
        session = replace(session, updated_at=time.time())
        file_path = self._get_file_path(session.session_id)
        temp_path = file_path.with_suffix(".json.tmp")

        with self._get_lock(session.session_id):
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(self._serialize_session(session), f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise

    def _serialize_session(self, session: BookingSession) -> dict[str, Any]:
        booking = session.booking
        return {
            "session_id": session.session_id,
            "updated_at": session.updated_at,
            "selection": [
                {
                    "name": item.name,
                    "duration_minutes": item.duration_minutes,
                    "price": item.price,
                    "price_max": item.price_max,
                }
                for item in session.selection.selected
            ],
            "booking": {
                "status": booking.status,
                "selected_date": booking.selected_date.isoformat() if booking.selected_date else None,
                "duration_minutes": booking.duration_minutes,
                "start_time": booking.start_time,
                "reserved_slots": list(booking.reserved_slots),
                "last_rejection": booking.last_rejection,
            },
            "version": 1,
        }

    def _deserialize_session(self, data: dict[str, Any]) -> BookingSession:
        selection = SelectionState(
            selected=tuple(
                SelectedService(
                    name=item["name"],
                    duration_minutes=item["duration_minutes"],
                    price=item["price"],
                    price_max=item.get("price_max"),
                )
                for item in data.get("selection", [])
            )
        )

        booking_data = data.get("booking", {})
        selected_date = None
        if booking_data.get("selected_date"):
            try:
                selected_date = date.fromisoformat(booking_data["selected_date"])
            except (ValueError, TypeError):
                selected_date = None

        booking = BookingState(
            status=booking_data.get("status", "no_date") if selected_date else "no_date",
            selected_date=selected_date,
            duration_minutes=booking_data.get("duration_minutes", 0),
            start_time=booking_data.get("start_time") if selected_date else None,
            reserved_slots=tuple(booking_data.get("reserved_slots", [])) if selected_date else (),
            last_rejection=booking_data.get("last_rejection"),
        )

        return BookingSession(
            session_id=data["session_id"],
            selection=selection,
            booking=booking,
            updated_at=data.get("updated_at"),
        )
