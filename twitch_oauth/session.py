"""Sign-in / sign-out state machine for a single Twitch session

The controller owns the current Session and AuthStatus and is the only
writer of the bearer credential on the resource API client.
"""

import functools
import logging
import secrets
from contextlib import contextmanager
from typing import Awaitable, Callable, Iterator, List, NamedTuple, Optional, Sequence

import httpx

from .api_client import CredentialAttacher, TwitchAPIClient
from .authorization import AuthorizationRequestBuilder
from .constants import ACCESS_DENIED, DEFAULT_SCOPES
from .errors import (
    AuthFlowError,
    AuthStateError,
    ErrorKind,
    ExchangeFailureError,
    LoginError,
    StateMismatchError,
    UserDeniedError,
)
from .models import AuthStatus, RedirectOutcome, Session, TwitchUser
from .redirect import RedirectHandler
from .revocation import revoke_token


logger = logging.getLogger(__name__)

Revoker = Callable[[str, str], Awaitable[None]]


class AuthContext(NamedTuple):
    """Read-only view of the session handed to consumers"""
    user: Session
    is_logging_in: bool
    is_logging_out: bool


Listener = Callable[[AuthContext], None]


class AuthSessionController:
    """Drives the implicit grant sign-in and the sign-out cleanup"""

    def __init__(
        self,
        client_id: str,
        redirect_handler: RedirectHandler,
        api_client: TwitchAPIClient,
        credentials: CredentialAttacher,
        builder: AuthorizationRequestBuilder,
        revoker: Revoker = revoke_token,
    ):
        """Initialize session controller

        Args:
            client_id: Twitch application client ID
            redirect_handler: Sends the user to the provider and awaits the redirect
            api_client: Helix API client used to fetch the profile
            credentials: Attacher for the API client's bearer header
            builder: Authorization request builder
            revoker: Coroutine revoking a token, called as revoker(token, client_id)
        """
        self.client_id = client_id
        self.redirect_handler = redirect_handler
        self.api = api_client
        self.builder = builder
        self._credentials = credentials
        self._revoker = revoker

        self._session = Session.empty()
        self._status = AuthStatus.IDLE
        self._listeners: List[Listener] = []

        self.api.set_client_id(client_id)

    # Consumer view

    @property
    def user(self) -> Session:
        return self._session

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def is_logging_in(self) -> bool:
        return self._status is AuthStatus.AUTHENTICATING

    @property
    def is_logging_out(self) -> bool:
        return self._status is AuthStatus.REVOKING_OUT

    @property
    def is_authenticated(self) -> bool:
        return self._status is AuthStatus.AUTHENTICATED

    def snapshot(self) -> AuthContext:
        return AuthContext(
            user=self._session,
            is_logging_in=self.is_logging_in,
            is_logging_out=self.is_logging_out,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a new snapshot on every status change

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: AuthStatus) -> None:
        if status is self._status:
            return
        logger.debug(f"Auth status {self._status.value} -> {status.value}")
        self._status = status

        context = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(context)
            except Exception:
                logger.exception("Auth state listener failed")

    @contextmanager
    def _status_scope(self, active: AuthStatus) -> Iterator[None]:
        """Hold ``active`` for the duration of a transition

        On every exit the status settles from the session: AUTHENTICATED if
        a token is held, IDLE otherwise.
        """
        self._set_status(active)
        try:
            yield
        finally:
            settled = AuthStatus.AUTHENTICATED if self._session.is_authenticated else AuthStatus.IDLE
            self._set_status(settled)

    # Sign-in

    async def sign_in(self) -> None:
        """Run one authorization attempt

        Raises:
            AuthStateError: A sign-in or sign-out is in progress, or already signed in
            LoginError: The attempt failed; the session stays empty
        """
        if self._status is AuthStatus.AUTHENTICATING:
            raise AuthStateError("A sign-in attempt is already in progress")
        if self._status is AuthStatus.REVOKING_OUT:
            raise AuthStateError("Cannot sign in while signing out")
        if self._status is AuthStatus.AUTHENTICATED:
            raise AuthStateError("Already signed in; sign out first")

        with self._status_scope(AuthStatus.AUTHENTICATING):
            try:
                self._session = await self._authenticate()
            except AuthFlowError as e:
                logger.warning(f"Sign-in failed ({e.kind.value}): {e}")
                raise LoginError(e.kind) from e
            except Exception as e:
                logger.error(f"Sign-in failed unexpectedly: {e}", exc_info=True)
                raise LoginError(ErrorKind.EXCHANGE_FAILURE) from e

        logger.info(f"Signed in as {self._session.display_name} (id {self._session.user_id})")

    async def _authenticate(self) -> Session:
        request = self.builder.build()
        logger.info("Starting Twitch authorization")

        result = await self.redirect_handler(request.authorization_url)

        if result.outcome is not RedirectOutcome.SUCCESS:
            raise UserDeniedError(f"Authorization ended with outcome '{result.outcome.value}'")
        if result.params.get("error") == ACCESS_DENIED:
            raise UserDeniedError("Access denied by user")

        returned_state = result.params.get("state") or ""
        if not secrets.compare_digest(returned_state.encode(), request.expected_state.encode()):
            raise StateMismatchError("Invalid state value.")

        access_token = result.params.get("access_token")
        if not access_token:
            raise ExchangeFailureError("Callback did not include an access token")

        self._credentials.set(access_token)
        session = None
        try:
            user = await self._fetch_profile()
            session = Session.from_user(user, access_token)
        finally:
            if session is None:
                self._credentials.clear()
        return session

    async def _fetch_profile(self) -> TwitchUser:
        try:
            users = await self.api.get_users()
        except httpx.HTTPError as e:
            raise ExchangeFailureError(f"Profile request failed: {e}") from e
        except ValueError as e:
            raise ExchangeFailureError(f"Malformed profile response: {e}") from e

        if not users:
            raise ExchangeFailureError("Profile response contained no users")

        # Only the first record is used; the token belongs to a single user
        return users[0]

    # Sign-out

    async def sign_out(self) -> None:
        """Revoke the token (best effort) and clear the session

        Raises:
            AuthStateError: A sign-in or sign-out is in progress
        """
        if self._status is AuthStatus.AUTHENTICATING:
            raise AuthStateError("Cannot sign out while a sign-in attempt is in progress")
        if self._status is AuthStatus.REVOKING_OUT:
            raise AuthStateError("A sign-out is already in progress")

        # The token is held only while AUTHENTICATED; revocation works from a copy
        token = self._session.access_token
        self._session = Session.empty()

        with self._status_scope(AuthStatus.REVOKING_OUT):
            try:
                if token:
                    await self._revoker(token, self.client_id)
                    logger.info("Access token revoked")
            except Exception as e:
                logger.warning(f"Token revocation failed ({ErrorKind.REVOCATION_FAILURE.value}): {e}")
            finally:
                self._credentials.clear()

        logger.info("Signed out")


def create_auth_session(
    client_id: str,
    redirect_uri: str,
    redirect_handler: RedirectHandler,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    api_client: Optional[TwitchAPIClient] = None,
    timeout: float = 30.0,
) -> AuthSessionController:
    """Wire a controller with the default Helix client and revocation call

    Args:
        client_id: Twitch application client ID
        redirect_uri: Redirect target registered for the application
        redirect_handler: Redirect mechanism to await
        scopes: Scopes to request
        api_client: Helix client (creates one if None)
        timeout: HTTP timeout in seconds

    Returns:
        AuthSessionController in the IDLE state
    """
    api_client = api_client or TwitchAPIClient(timeout=timeout)

    return AuthSessionController(
        client_id=client_id,
        redirect_handler=redirect_handler,
        api_client=api_client,
        credentials=api_client.credential_attacher(),
        builder=AuthorizationRequestBuilder(client_id, redirect_uri, scopes),
        revoker=functools.partial(revoke_token, timeout=timeout),
    )
