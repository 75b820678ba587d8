"""
Coinbase Advanced Trade (v3) API client

Provides:
- CbClient: async client for accounts, products, orders, fills and fees
- OAuthCbClient: OAuth2 authorization, token refresh and revocation
- CdpKeyTokenProvider / StaticTokenProvider: other ways to authenticate
- Order builders (coinbase_v3.orders) and typed models (coinbase_v3.schemas)
"""

from coinbase_v3.auth import AccessTokenProvider, CdpKeyTokenProvider, StaticTokenProvider
from coinbase_v3.client import CbClient
from coinbase_v3.exceptions import (
    CoinbaseApiError,
    CoinbaseError,
    ConfigurationError,
    DeserializationError,
    HttpError,
    HttpStatusError,
    InvalidScopeError,
    OAuthError,
    OrderValidationError,
    RateLimitError,
)
from coinbase_v3.oauth import OAuthCbClient, OAuthToken

__version__ = "0.3.0"

__all__ = [
    "AccessTokenProvider",
    "CbClient",
    "CdpKeyTokenProvider",
    "CoinbaseApiError",
    "CoinbaseError",
    "ConfigurationError",
    "DeserializationError",
    "HttpError",
    "HttpStatusError",
    "InvalidScopeError",
    "OAuthCbClient",
    "OAuthError",
    "OAuthToken",
    "OrderValidationError",
    "RateLimitError",
    "StaticTokenProvider",
]
