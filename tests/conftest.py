import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from twitch_oauth import (  # noqa: E402
    API_BASE_URL,
    AuthorizationRequestBuilder,
    AuthSessionController,
    HeaderCredentialAttacher,
    RedirectOutcome,
    RedirectResult,
    TwitchAPIClient,
)


CLIENT_ID = "abc123"
REDIRECT_URI = "http://localhost:3000/auth/callback"
ACCESS_TOKEN = "tok_0123456789abcdef"

PROFILE = {
    "id": "141981764",
    "login": "twitchdev",
    "display_name": "TwitchDev",
    "email": "dev@example.com",
    "profile_image_url": "https://static-cdn.jtvnw.net/user-default-pictures/profile.png",
}


def state_from_url(url: str) -> str:
    return parse_qs(urlparse(url).query)["state"][0]


class FakeRedirect:
    """Redirect handler double answering from a callable"""

    def __init__(self, respond: Callable[[str], RedirectResult]):
        self.respond = respond
        self.calls: List[str] = []

    async def __call__(self, authorization_url: str) -> RedirectResult:
        self.calls.append(authorization_url)
        return self.respond(authorization_url)


def approve(token: str = ACCESS_TOKEN) -> Callable[[str], RedirectResult]:
    def respond(url: str) -> RedirectResult:
        return RedirectResult(
            outcome=RedirectOutcome.SUCCESS,
            params={"state": state_from_url(url), "access_token": token, "token_type": "bearer"},
        )
    return respond


class SpyAttacher(HeaderCredentialAttacher):
    """Real header attacher that remembers every token it was given"""

    def __init__(self, client: httpx.AsyncClient):
        super().__init__(client)
        self.attached: List[str] = []

    def set(self, token: str) -> None:
        self.attached.append(token)
        super().set(token)


class FakeRevoker:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[tuple] = []

    async def __call__(self, token: str, client_id: str) -> None:
        self.calls.append((token, client_id))
        if self.error:
            raise self.error


class HelixStub:
    """MockTransport handler recording requests to the Helix API"""

    def __init__(self, users: Optional[List[Dict]] = None, status_code: int = 200, body=None):
        self.users = [PROFILE] if users is None else users
        self.status_code = status_code
        self.body = body
        self.unreachable = False
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json={"data": self.users})


@pytest.fixture
def helix():
    return HelixStub()


@pytest.fixture
def http_client(helix):
    return httpx.AsyncClient(base_url=API_BASE_URL, transport=httpx.MockTransport(helix))


@pytest.fixture
def api_client(http_client):
    return TwitchAPIClient(http_client=http_client)


@pytest.fixture
def attacher(http_client):
    return SpyAttacher(http_client)


@pytest.fixture
def revoker():
    return FakeRevoker()


@pytest.fixture
def make_controller(api_client, attacher, revoker):
    def factory(redirect) -> AuthSessionController:
        return AuthSessionController(
            client_id=CLIENT_ID,
            redirect_handler=redirect,
            api_client=api_client,
            credentials=attacher,
            builder=AuthorizationRequestBuilder(CLIENT_ID, REDIRECT_URI),
            revoker=revoker,
        )
    return factory
