from spotify_web_api.config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Spotify endpoints (hardcoded - not user configurable)
# Accounts host serves the OAuth2 authorize/token endpoints, API host the resources
ACCOUNT_URL = "https://accounts.spotify.com"
API_URL = "https://api.spotify.com"
AUTHORIZE_PATH = "/authorize"
TOKEN_PATH = "/api/token"

USER_AGENT = "spotify-web-api-python/1.0.0"

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("SPOTIFY_CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for a single request
REQUEST_TIMEOUT = config.get("SPOTIFY_REQUEST_TIMEOUT", 30.0)

LOG_LEVEL = config.get("SPOTIFY_LOG_LEVEL", "warning")

# Client option defaults (see Options.from_settings)
AUTO_REFRESH = config.get("SPOTIFY_AUTO_REFRESH", False)
AUTO_RETRY = config.get("SPOTIFY_AUTO_RETRY", False)
RETURN_ASSOC = config.get("SPOTIFY_RETURN_ASSOC", False)

# PKCE / state generation
DEFAULT_STATE_LENGTH = 16
DEFAULT_CODE_VERIFIER_LENGTH = 128
MIN_CODE_VERIFIER_LENGTH = 43
MAX_CODE_VERIFIER_LENGTH = 128
