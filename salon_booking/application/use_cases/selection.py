from __future__ import annotations

import logging
from dataclasses import dataclass

from salon_booking.application.exceptions import UnknownServiceError
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.utils.pricing import parse_price
from salon_booking.domain.entities.selection_state import SelectedService, SelectionState


def toggle_service(
    state: SelectionState,
    name: str,
    duration_minutes: int,
    price: int | float | str,
) -> SelectionState:
    """Flip the selection of one service. Totals are derived from the result."""
    if state.is_selected(name):
        return SelectionState(selected=tuple(item for item in state.selected if item.name != name))

    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")
    quote = parse_price(price)
    return SelectionState(
        selected=state.selected
        + (
            SelectedService(
                name=name,
                duration_minutes=duration_minutes,
                price=quote.amount,
                price_max=quote.amount_max,
            ),
        )
    )


def reset_selection() -> SelectionState:
    return SelectionState()


@dataclass(frozen=True)
class SelectionResult:
    updated_state: SelectionState
    service_name: str
    selected: bool  # whether the service is selected after the toggle


class SelectionUseCase:
    """Toggle catalog services in and out of a booking cart."""

    def __init__(self, catalog: ServiceCatalogPort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def toggle(self, state: SelectionState, name: str) -> SelectionResult:
        entry = self._catalog.get_service(name)
        if entry is None:
            raise UnknownServiceError(f"Unknown service: {name!r}")

        updated = toggle_service(state, entry.name, entry.duration_minutes, entry.price)
        self._logger.debug(
            "Service toggled",
            extra={
                "service": entry.name,
                "duration": updated.total_duration_minutes,
                "total_price": updated.total_price,
            },
        )
        return SelectionResult(
            updated_state=updated,
            service_name=entry.name,
            selected=updated.is_selected(entry.name),
        )

    def reset(self) -> SelectionState:
        return reset_selection()
