"""
Twitch OAuth token revocation
"""
import logging
from typing import Optional

import httpx

from .constants import REVOKE_URL


logger = logging.getLogger(__name__)


async def revoke_token(
    token: str,
    client_id: str,
    http_client: Optional[httpx.AsyncClient] = None,
    revoke_url: str = REVOKE_URL,
    timeout: float = 30.0,
) -> None:
    """
    Ask Twitch to invalidate an access token.

    Args:
        token: Access token to revoke
        client_id: Twitch application client ID
        http_client: Client to send the request with (a temporary one if None)
        revoke_url: Revocation endpoint
        timeout: Request timeout in seconds

    Raises:
        httpx.HTTPError: Transport failure or non-2xx response
    """
    data = {"client_id": client_id, "token": token}
    headers = {"Content-Type": "application/x-www-form-urlencoded"}

    if http_client is not None:
        response = await http_client.post(revoke_url, data=data, headers=headers, timeout=timeout)
    else:
        async with httpx.AsyncClient() as client:
            response = await client.post(revoke_url, data=data, headers=headers, timeout=timeout)

    logger.debug(f"Revocation response status: {response.status_code}")
    response.raise_for_status()
