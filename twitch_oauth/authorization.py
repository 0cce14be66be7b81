"""
Twitch OAuth authorization request construction (implicit grant)
"""
import secrets
import string
from typing import Optional, Sequence
from urllib.parse import quote, urlencode

from .constants import (
    AUTHORIZE_URL,
    DEFAULT_SCOPES,
    RESPONSE_TYPE,
    STATE_LENGTH,
)
from .models import AuthorizationRequest


# RFC 3986 unreserved characters
_STATE_CHARSET = string.ascii_letters + string.digits + "-._~"


def generate_random(size: int) -> str:
    """
    Generate a random string from the unreserved URL alphabet.

    Args:
        size: Number of characters

    Returns:
        str: Random string drawn from a CSPRNG
    """
    return "".join(secrets.choice(_STATE_CHARSET) for _ in range(size))


def create_state(size: int = STATE_LENGTH) -> str:
    """
    Generate random state parameter for CSRF protection.

    Returns:
        str: Anti-forgery state of ``size`` characters
    """
    return generate_random(size)


class AuthorizationRequestBuilder:
    """Builds Twitch authorization URLs with a fresh anti-forgery state"""

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        authorization_endpoint: str = AUTHORIZE_URL,
        state_length: Optional[int] = None,
    ):
        """Initialize authorization request builder

        Args:
            client_id: Twitch application client ID
            redirect_uri: Redirect target the redirect mechanism intercepts
            scopes: Ordered scopes to request
            authorization_endpoint: Provider authorization URL
            state_length: Length of the generated state (minimum 30)
        """
        state_length = STATE_LENGTH if state_length is None else state_length
        if state_length < STATE_LENGTH:
            raise ValueError(f"state_length must be at least {STATE_LENGTH}")

        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.scopes = tuple(scopes)
        self.authorization_endpoint = authorization_endpoint
        self.state_length = state_length

    def build(self) -> AuthorizationRequest:
        """Construct the authorization URL for a single sign-in attempt

        Returns:
            AuthorizationRequest with the URL and the state it carries
        """
        state = create_state(self.state_length)

        params = {
            "response_type": RESPONSE_TYPE,
            "client_id": self.client_id,
            "scope": " ".join(self.scopes),
            "state": state,
            # Make Twitch re-prompt even if the user is already signed in there
            "force_verify": "true",
            "redirect_uri": self.redirect_uri,
        }

        url = f"{self.authorization_endpoint}?{urlencode(params, quote_via=quote)}"

        return AuthorizationRequest(authorization_url=url, expected_state=state)
