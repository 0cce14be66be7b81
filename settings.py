from config.loader import get_config_loader
from twitch_oauth.constants import DEFAULT_SCOPES, OAUTH_CALLBACK_PATH, OAUTH_CALLBACK_PORT

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "warning")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "twitch_auth_debug.log")

# Twitch application (registered at dev.twitch.tv)
# Required for sign-in; an empty value is reported as a configuration error
CLIENT_ID = config.get("TWITCH_CLIENT_ID", "")

# Local redirect capture
CALLBACK_PORT = config.get("CALLBACK_PORT", OAUTH_CALLBACK_PORT)
# Must match a redirect URL registered for the application
REDIRECT_URI = config.get("REDIRECT_URI", f"http://localhost:{CALLBACK_PORT}{OAUTH_CALLBACK_PATH}")

# Scopes (hardcoded - not user configurable)
SCOPES = DEFAULT_SCOPES

# Timeouts
# HTTP timeout for Helix and revocation calls
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)
# How long to wait for the browser redirect before treating the attempt as cancelled
REDIRECT_TIMEOUT = config.get("REDIRECT_TIMEOUT", 300.0)
