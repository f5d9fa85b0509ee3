#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP, no backend).

Usage:
  python3 scripts/book_local.py

Runs the same selection, availability and booking use cases as the API
against in-memory adapters and prints the slot board after each step.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.application.exceptions import (  # noqa: E402
    BookingIncompleteError,
    NonSelectableDateError,
    SlotSelectionError,
    UnknownServiceError,
)
from salon_booking.application.use_cases.availability import AvailabilityResolver  # noqa: E402
from salon_booking.application.use_cases.booking import BookingUseCase  # noqa: E402
from salon_booking.application.use_cases.selection import SelectionUseCase  # noqa: E402
from salon_booking.application.utils.formatting import format_duration  # noqa: E402
from salon_booking.application.utils.pricing import format_price  # noqa: E402
from salon_booking.domain.entities.session import BookingSession  # noqa: E402
from salon_booking.infrastructure.backend.memory_booking_store import MemoryBookingStore  # noqa: E402
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore  # noqa: E402

HELP = """Commands:
  /services             list the menu
  /toggle <name>        select or unselect a service
  /date <YYYY-MM-DD>    pick a date
  /slots                show the slot board
  /time <h:mm AM|PM>    pick a start time
  /confirm              book it
  /reset                start over
  /quit"""


def _print_session(session: BookingSession) -> None:
    selection = session.selection
    booking = session.booking
    print(f"services: {', '.join(selection.service_names) or '-'}")
    print(f"total: ${selection.total_price}  duration: {format_duration(selection.total_duration_minutes)}")
    print(f"status: {booking.status}  date: {booking.selected_date or '-'}  time: {booking.start_time or '-'}")
    if booking.last_rejection:
        print(f"last declined: {booking.last_rejection}")


def main() -> None:
    catalog = ServiceCatalogStore()
    selection_uc = SelectionUseCase(catalog)
    booking_uc = BookingUseCase(MemoryBookingStore(), AvailabilityResolver())
    session = BookingSession(session_id="local")

    print("\nLocal Booking Harness")
    print("-" * 60)
    print(HELP)
    print("-" * 60)

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue

        command, _, arg = line.partition(" ")
        arg = arg.strip()

        try:
            if command == "/quit":
                return
            if command == "/help":
                print(HELP)
            elif command == "/services":
                for entry in catalog.list_services():
                    mark = "x" if session.selection.is_selected(entry.name) else " "
                    print(
                        f"[{mark}] {entry.name:<34} {format_price(entry.price):>8}  "
                        f"{format_duration(entry.duration_minutes)}"
                    )
            elif command == "/toggle":
                result = selection_uc.toggle(session.selection, arg)
                session = booking_uc.sync_session(replace(session, selection=result.updated_state))
                _print_session(session)
            elif command == "/date":
                session = booking_uc.select_date(session, date.fromisoformat(arg))
                _print_session(session)
            elif command == "/slots":
                session, board = booking_uc.availability(session)
                for slot in board:
                    flag = "*" if slot.selected else ("x" if slot.booked else ("-" if slot.disabled else " "))
                    print(f"  [{flag}] {slot.time}")
            elif command == "/time":
                session, result = booking_uc.choose_time(session, arg)
                _print_session(session)
            elif command == "/confirm":
                confirmation = booking_uc.confirm("local_user", session)
                booking = confirmation.booking
                print(f"Booked {booking.date} at {booking.start_time}: {', '.join(booking.occupied_slots)}")
                session = confirmation.session
            elif command == "/reset":
                session = BookingSession(session_id=session.session_id)
                _print_session(session)
            else:
                print("Unknown command, try /help")
        except (UnknownServiceError, NonSelectableDateError, BookingIncompleteError, SlotSelectionError, ValueError) as e:
            print(f"error: {e}")

        print("-" * 60)


if __name__ == "__main__":
    main()
