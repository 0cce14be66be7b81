"""Data models for Twitch OAuth authentication"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, NamedTuple, Optional

from pydantic import BaseModel


class AuthStatus(Enum):
    """Lifecycle state of an authentication session"""
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    REVOKING_OUT = "revoking_out"


class RedirectOutcome(Enum):
    """How a redirect round trip through the provider ended"""
    SUCCESS = "success"
    CANCEL = "cancel"
    DENIED = "denied"


@dataclass
class RedirectResult:
    """Single-shot result of the redirect mechanism

    Attributes:
        outcome: Success, user cancellation or provider denial
        params: Callback parameters (state, access_token, error, ...)
    """
    outcome: RedirectOutcome
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def cancelled(cls) -> "RedirectResult":
        return cls(outcome=RedirectOutcome.CANCEL)


class AuthorizationRequest(NamedTuple):
    """Authorization URL paired with the state it was built with"""
    authorization_url: str
    expected_state: str


@dataclass(frozen=True)
class Session:
    """Authenticated Twitch session

    Attributes:
        user_id: Twitch user identifier
        display_name: User's display name
        email: Verified email address
        profile_image_url: Avatar URL
        access_token: Bearer token, empty unless authenticated
    """
    user_id: Optional[int] = None
    display_name: str = ""
    email: str = ""
    profile_image_url: str = ""
    access_token: str = field(default="", repr=False)

    @classmethod
    def empty(cls) -> "Session":
        return cls()

    @classmethod
    def from_user(cls, user: "TwitchUser", access_token: str) -> "Session":
        return cls(
            user_id=user.id,
            display_name=user.display_name,
            email=user.email,
            profile_image_url=user.profile_image_url,
            access_token=access_token,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class TwitchUser(BaseModel):
    """Profile record returned by GET /users"""
    id: int
    display_name: str
    email: str
    profile_image_url: str
