"""
Access token providers for Coinbase Advanced Trade API
Supports OAuth2 bearer tokens (see coinbase_v3.oauth) and CDP (JWT) API keys
"""

import json
import logging
import secrets
import time
from abc import ABC, abstractmethod
from typing import Tuple

import jwt
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization

from coinbase_v3.constants import CDP_JWT_TTL
from coinbase_v3.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AccessTokenProvider(ABC):
    """Source of bearer tokens for CbClient requests"""

    @abstractmethod
    async def access_token(self, method: str, path: str) -> str:
        """Return a bearer token valid for `method path`."""

    async def force_refresh(self) -> bool:
        """
        Called after a 401. Return True if a new token was obtained and the
        request is worth retrying.
        """
        return False


class StaticTokenProvider(AccessTokenProvider):
    """Token obtained elsewhere (e.g. a stored OAuth2 access token)"""

    def __init__(self, token: str):
        if not token:
            raise ConfigurationError("Access token must not be empty")
        self._token = token

    async def access_token(self, method: str, path: str) -> str:
        return self._token


def load_cdp_credentials_from_file(file_path: str) -> Tuple[str, str]:
    """
    Load CDP credentials from JSON key file

    Args:
        file_path: Path to cdp_api_key.json file

    Returns:
        Tuple of (key_name, private_key)
    """
    try:
        with open(file_path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read CDP key file {file_path}: {e}") from e

    try:
        return data["name"], data["privateKey"]
    except KeyError as e:
        raise ConfigurationError(f"CDP key file {file_path} is missing {e}") from e


class CdpKeyTokenProvider(AccessTokenProvider):
    """Signs a short-lived ES256 JWT for every request"""

    def __init__(self, key_name: str, private_key: str):
        if not key_name or not private_key:
            raise ConfigurationError("CDP key name and private key are required")
        self.key_name = key_name
        try:
            self._private_key = serialization.load_pem_private_key(
                private_key.encode("utf-8"), password=None, backend=default_backend()
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid CDP private key: {e}") from e

    @classmethod
    def from_file(cls, file_path: str) -> "CdpKeyTokenProvider":
        key_name, private_key = load_cdp_credentials_from_file(file_path)
        return cls(key_name, private_key)

    def generate_jwt(self, request_method: str, request_path: str) -> str:
        """
        Generate JWT token for a CDP API request

        Args:
            request_method: HTTP method (GET, POST, etc.)
            request_path: API endpoint path, query string allowed

        Returns:
            JWT token string
        """
        # Query parameters are not part of the signed URI
        path_without_query = request_path.split("?")[0]
        uri = f"{request_method} api.coinbase.com{path_without_query}"
        current_time = int(time.time())

        payload = {
            "sub": self.key_name,
            "iss": "cdp",
            "nbf": current_time,
            "exp": current_time + CDP_JWT_TTL,
            "uri": uri,
        }

        return jwt.encode(
            payload,
            self._private_key,
            algorithm="ES256",
            headers={"kid": self.key_name, "nonce": secrets.token_hex(16)},
        )

    async def access_token(self, method: str, path: str) -> str:
        return self.generate_jwt(method, path)
