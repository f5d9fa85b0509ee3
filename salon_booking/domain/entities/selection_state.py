from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectedService:
    name: str
    duration_minutes: int
    price: int | float  # amount counted in totals
    price_max: int | float | None = None  # upper bound of an additive range, display only


@dataclass(frozen=True)
class SelectionState:
    selected: tuple[SelectedService, ...] = ()

    @property
    def services(self) -> dict[str, bool]:
        return {item.name: True for item in self.selected}

    @property
    def service_names(self) -> list[str]:
        return [item.name for item in self.selected]

    @property
    def total_duration_minutes(self) -> int:
        return sum(item.duration_minutes for item in self.selected)

    @property
    def total_price(self) -> int | float:
        return sum(item.price for item in self.selected)

    @property
    def total_price_max(self) -> int | float:
        return sum(item.price_max if item.price_max is not None else item.price for item in self.selected)

    def is_selected(self, name: str) -> bool:
        return any(item.name == name for item in self.selected)
