"""
Exceptions raised by the Coinbase v3 client.

Everything derives from CoinbaseError so callers can catch a single type.
Transport failures, Coinbase error bodies, and unexpected payloads each get
their own subclass so they can be told apart when it matters.
"""

from typing import Optional


class CoinbaseError(Exception):
    """Base client error with an optional HTTP status code."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(CoinbaseError):
    """A required setting or environment variable is missing."""


class HttpError(CoinbaseError):
    """Transport-level failure (connection refused, timeout, ...)."""


class HttpStatusError(CoinbaseError):
    """Non-2xx response whose body is not a Coinbase error payload."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        self.body = body
        super().__init__(message, status_code=status_code)


class CoinbaseApiError(CoinbaseError):
    """Coinbase answered with an error payload."""

    def __init__(self, error, status_code: Optional[int] = None):
        # error is a schemas.errors.CbRequestError
        self.error = error
        super().__init__(f"Coinbase: {error.error} ({error.message})", status_code=status_code)


class RateLimitError(CoinbaseApiError):
    """Too many requests (429) even after retrying."""

    def __init__(self, error, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        super().__init__(error, status_code=429)


class DeserializationError(CoinbaseError):
    """Response body did not match the expected model."""


class OAuthError(CoinbaseError):
    """OAuth2 authorization, token exchange, refresh or revocation failed."""


class InvalidScopeError(CoinbaseError, ValueError):
    """Scope is not one of the documented Coinbase scopes."""

    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Invalid scope: {scope}")


class OrderValidationError(CoinbaseError, ValueError):
    """Order builder received invalid input."""
