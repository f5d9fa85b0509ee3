from __future__ import annotations

from salon_booking.application.ports.identity import IdentityPort
from salon_booking.domain.entities.profile import UserIdentity


class StaticIdentityProvider(IdentityPort):
    """Dev/local identity: every caller is known, phone numbers come from a fixed map."""

    def __init__(self, users: dict[str, UserIdentity] | None = None) -> None:
        self._users = dict(users or {})

    def get_user(self, user_id: str) -> UserIdentity | None:
        if not user_id:
            return None
        return self._users.get(user_id) or UserIdentity(user_id=user_id)

    def add_user(self, identity: UserIdentity) -> None:
        self._users[identity.user_id] = identity
