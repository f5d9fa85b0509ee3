from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserIdentity:
    user_id: str
    phone_number: str | None = None
    name: str | None = None
