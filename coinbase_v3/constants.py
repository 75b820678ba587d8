"""
Constants for the Coinbase v3 client
"""

# REST API
BASE_URL = "https://api.coinbase.com"
API_PREFIX = "/api/v3/brokerage"

# OAuth2 endpoints
AUTH_URL = "https://www.coinbase.com/oauth/authorize"
TOKEN_URL = "https://www.coinbase.com/oauth/token"
REVOKE_URL = "https://api.coinbase.com/oauth/revoke"

# Request defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

# Refresh access tokens this many seconds before they expire
TOKEN_REFRESH_MARGIN = 60

# CDP JWTs are valid for 2 minutes
CDP_JWT_TTL = 120
