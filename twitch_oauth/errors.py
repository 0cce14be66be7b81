"""Error types for the Twitch sign-in flow"""

from enum import Enum
from typing import Optional

from .constants import INVALID_LOGIN_MESSAGE


class ErrorKind(Enum):
    """Internal cause of an authentication failure"""
    STATE_MISMATCH = "state_mismatch"
    USER_DENIED = "user_denied"
    EXCHANGE_FAILURE = "exchange_failure"
    REVOCATION_FAILURE = "revocation_failure"


class AuthFlowError(Exception):
    """Base class for failures inside the authorization flow"""
    kind: ErrorKind = ErrorKind.EXCHANGE_FAILURE


class StateMismatchError(AuthFlowError):
    """Returned state does not match the one sent (forged or replayed response)"""
    kind = ErrorKind.STATE_MISMATCH


class UserDeniedError(AuthFlowError):
    """User cancelled or the provider denied access"""
    kind = ErrorKind.USER_DENIED


class ExchangeFailureError(AuthFlowError):
    """Callback was valid but the identity could not be fetched"""
    kind = ErrorKind.EXCHANGE_FAILURE


class LoginError(Exception):
    """Generic sign-in failure surfaced to callers

    The message is always the same; ``kind`` keeps the internal cause
    available for logging and diagnostics.
    """

    def __init__(self, kind: Optional[ErrorKind] = None):
        super().__init__(INVALID_LOGIN_MESSAGE)
        self.kind = kind


class AuthStateError(Exception):
    """Operation is not allowed in the session's current state"""
