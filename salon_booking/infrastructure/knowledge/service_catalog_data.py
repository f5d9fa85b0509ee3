from __future__ import annotations

from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry


def _entries(category: str, items: list[tuple[str, int | str, int]]) -> list[ServiceCatalogEntry]:
    return [
        ServiceCatalogEntry(name=name, category=category, price=price, duration_minutes=duration)
        for name, price, duration in items
    ]


# (name, price, duration in minutes); removal is included on every set
SERVICE_CATALOG: list[ServiceCatalogEntry] = [
    *_entries(
        "Nature Nails",
        [
            ("Shellac manicure", 30, 45),
            ("Mini shellac pedicure", 32, 40),
        ],
    ),
    *_entries(
        "Nails Extension",
        [
            ("New set GEL-X Short/Medium", 50, 90),
            ("Re-fill GEL-X *Only once*", 45, 60),
            ("New set Acrylic Short/Medium", 45, 75),
            ("Re-fill Acrylic", 40, 60),
            ("Hard gel/Acrylic overlay", 37, 60),
            ("Long / Extra Long", "+5", 15),
        ],
    ),
    *_entries(
        "Add On",
        [
            ("Charm/Crystal", "+5~15", 15),
            ("French tip/Ombre", "+10", 15),
            ("Chrome/Magnetic Cat-eye polish", "+10", 15),
            ("Nails Art", "+5~15", 15),
        ],
    ),
]
