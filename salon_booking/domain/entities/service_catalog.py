from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceCatalogEntry:
    name: str
    category: str
    duration_minutes: int
    price: int | float | str  # plain amount, or additive modifier "+5" / "+5~15"
    notes: str | None = None
