from abc import ABC, abstractmethod

from salon_booking.domain.entities.session import BookingSession


class SessionStorePort(ABC):
    @abstractmethod
    def get_or_create(self, session_id: str | None) -> BookingSession:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> BookingSession | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: BookingSession) -> None:
        raise NotImplementedError
