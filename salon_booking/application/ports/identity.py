from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.profile import UserIdentity


class IdentityPort(ABC):
    @abstractmethod
    def get_user(self, user_id: str) -> UserIdentity | None:
        """Resolve a user id issued by the identity provider. None if unknown."""
        raise NotImplementedError
