"""Twitch Helix API client and bearer credential attachment"""

import logging
from typing import List, Optional, Protocol

import httpx

from .constants import API_BASE_URL, USERS_PATH
from .models import TwitchUser


logger = logging.getLogger(__name__)


class CredentialAttacher(Protocol):
    """Single writer of the bearer credential on the resource API client"""

    def set(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class HeaderCredentialAttacher:
    """Sets and removes the default Authorization header of an httpx client"""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    def set(self, token: str) -> None:
        self._client.headers["Authorization"] = f"Bearer {token}"
        logger.debug("Bearer credential attached")

    def clear(self) -> None:
        self._client.headers.pop("Authorization", None)
        logger.debug("Bearer credential removed")

    @property
    def is_attached(self) -> bool:
        return "Authorization" in self._client.headers


class TwitchAPIClient:
    """Thin async client for the Twitch Helix API"""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
    ):
        """Initialize API client

        Args:
            http_client: Preconfigured httpx client (creates one if None)
            base_url: Helix base URL
            timeout: Request timeout in seconds
        """
        self.http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    def set_client_id(self, client_id: str) -> None:
        """Set the default Client-Id header sent with every request"""
        self.http.headers["Client-Id"] = client_id

    def credential_attacher(self) -> HeaderCredentialAttacher:
        """Create the attacher owning this client's Authorization header"""
        return HeaderCredentialAttacher(self.http)

    async def get_users(self) -> List[TwitchUser]:
        """Fetch the profile(s) of the user owning the current credential

        Returns:
            Profile records from the response's ``data`` array

        Raises:
            httpx.HTTPError: Transport failure or non-2xx response
            pydantic.ValidationError: Malformed profile record
        """
        response = await self.http.get(USERS_PATH)
        logger.debug(f"GET {USERS_PATH} response status: {response.status_code}")
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict) or not isinstance(payload.get("data", []), list):
            raise ValueError("Unexpected /users response shape")
        return [TwitchUser.model_validate(item) for item in payload.get("data", [])]

    async def aclose(self) -> None:
        await self.http.aclose()
