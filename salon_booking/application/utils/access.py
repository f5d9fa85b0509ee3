from __future__ import annotations

from collections.abc import Iterable

from salon_booking.domain.entities.profile import UserIdentity


def is_privileged(identity: UserIdentity | None, allow_list: Iterable[str]) -> bool:
    """Admin viewers are recognised by phone number."""
    if identity is None or not identity.phone_number:
        return False
    return identity.phone_number.strip() in {phone.strip() for phone in allow_list}
