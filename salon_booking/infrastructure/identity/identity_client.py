from __future__ import annotations

import logging

import httpx

from salon_booking.application.exceptions import BackendContractError, BackendUpstreamError
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.core.config import settings
from salon_booking.domain.entities.profile import UserIdentity


class IdentityProviderClient(IdentityPort):
    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._secret_key = secret_key or settings.IDENTITY_SECRET_KEY
        self._base_url = (base_url or settings.IDENTITY_API_URL).rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._secret_key:
            raise ValueError("IDENTITY_SECRET_KEY is required for the identity provider")

    def get_user(self, user_id: str) -> UserIdentity | None:
        if not user_id:
            return None
        url = f"{self._base_url}/users/{user_id}"
        headers = {"Authorization": f"Bearer {self._secret_key}"}
        try:
            response = self._client.get(url, headers=headers)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            self._logger.error("Error fetching user", extra={"user_id": user_id, "error": str(e)})
            raise BackendUpstreamError(f"Identity lookup failed: {e}") from e
        except ValueError as e:
            raise BackendContractError(f"Identity response is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise BackendContractError("Identity response must be an object")
        phones = data.get("phone_numbers") or []
        first = phones[0] if isinstance(phones, list) and phones else None
        phone_number = first.get("phone_number") if isinstance(first, dict) else None
        name = " ".join(part for part in (data.get("first_name"), data.get("last_name")) if part) or None
        return UserIdentity(user_id=str(data.get("id") or user_id), phone_number=phone_number, name=name)
