"""Twitch OAuth authentication module

Implicit grant sign-in against Twitch with anti-forgery state checks,
profile lookup and best-effort token revocation on sign-out.
"""

from .constants import (
    AUTHORIZE_URL,
    REVOKE_URL,
    API_BASE_URL,
    DEFAULT_SCOPES,
    OAUTH_CALLBACK_PORT,
    OAUTH_CALLBACK_PATH,
)
from .models import (
    AuthStatus,
    AuthorizationRequest,
    RedirectOutcome,
    RedirectResult,
    Session,
    TwitchUser,
)
from .errors import (
    ErrorKind,
    AuthFlowError,
    StateMismatchError,
    UserDeniedError,
    ExchangeFailureError,
    LoginError,
    AuthStateError,
)
from .authorization import AuthorizationRequestBuilder, create_state, generate_random
from .callback import parse_callback_url, result_from_params
from .redirect import (
    RedirectHandler,
    CallbackServer,
    BrowserRedirectHandler,
    ManualRedirectHandler,
)
from .api_client import CredentialAttacher, HeaderCredentialAttacher, TwitchAPIClient
from .revocation import revoke_token
from .session import AuthContext, AuthSessionController, create_auth_session

__all__ = [
    # Constants
    "AUTHORIZE_URL",
    "REVOKE_URL",
    "API_BASE_URL",
    "DEFAULT_SCOPES",
    "OAUTH_CALLBACK_PORT",
    "OAUTH_CALLBACK_PATH",
    # Models
    "AuthStatus",
    "AuthorizationRequest",
    "RedirectOutcome",
    "RedirectResult",
    "Session",
    "TwitchUser",
    # Errors
    "ErrorKind",
    "AuthFlowError",
    "StateMismatchError",
    "UserDeniedError",
    "ExchangeFailureError",
    "LoginError",
    "AuthStateError",
    # Authorization
    "AuthorizationRequestBuilder",
    "create_state",
    "generate_random",
    # Callback / redirect
    "parse_callback_url",
    "result_from_params",
    "RedirectHandler",
    "CallbackServer",
    "BrowserRedirectHandler",
    "ManualRedirectHandler",
    # API
    "CredentialAttacher",
    "HeaderCredentialAttacher",
    "TwitchAPIClient",
    "revoke_token",
    # Session
    "AuthContext",
    "AuthSessionController",
    "create_auth_session",
]
