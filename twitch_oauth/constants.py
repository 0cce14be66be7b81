"""
Twitch OAuth constants
"""

# Identity provider endpoints
AUTHORIZE_URL = "https://id.twitch.tv/oauth2/authorize"
REVOKE_URL = "https://id.twitch.tv/oauth2/revoke"

# Resource API (Helix)
API_BASE_URL = "https://api.twitch.tv/helix"
USERS_PATH = "/users"

# Implicit grant: access token is returned directly in the redirect
RESPONSE_TYPE = "token"

DEFAULT_SCOPES = ("openid", "user:read:email", "user:read:follows")

# Minimum anti-forgery state length
STATE_LENGTH = 30

# Local redirect capture
OAUTH_CALLBACK_PORT = 3000
OAUTH_CALLBACK_PATH = "/auth/callback"
OAUTH_TOKEN_PATH = "/auth/token"

# Error value reported by the provider when the user refuses consent
ACCESS_DENIED = "access_denied"

# Message surfaced for every sign-in failure
INVALID_LOGIN_MESSAGE = "Invalid login."
