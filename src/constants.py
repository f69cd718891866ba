"""Application constants - centralized configuration values."""

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0

# =============================================================================
# OAuth providers
# =============================================================================
PROVIDER_GITHUB = "github"

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_BASE_URL = "https://api.github.com/"
GITHUB_SCOPE = "user:email"

# =============================================================================
# New user defaults
# =============================================================================
DEFAULT_USER_NAME = "User"

# =============================================================================
# Tokens
# =============================================================================
JWT_ALGORITHM = "HS256"
TOKEN_TYPE = "Bearer"

# =============================================================================
# Session & Security
# =============================================================================
SESSION_TIMEOUT_DAYS = 7
SESSION_COOKIE_NAME = "identity_link_session"
