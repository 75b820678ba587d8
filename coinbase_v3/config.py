from pydantic import field_validator
from pydantic_settings import BaseSettings

from coinbase_v3.constants import BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, TOKEN_REFRESH_MARGIN


class Settings(BaseSettings):
    # Coinbase OAuth2 application
    cb_oauth_client_id: str = ""
    cb_oauth_client_secret: str = ""
    cb_oauth_redirect_url: str = ""  # e.g. http://localhost:3001

    # Coinbase CDP API key (alternative to OAuth2)
    coinbase_cdp_key_file: str = ""  # Path to cdp_api_key.json file
    coinbase_cdp_key_name: str = ""  # API key name from CDP
    coinbase_cdp_private_key: str = ""  # EC private key from CDP

    @field_validator("coinbase_cdp_private_key")
    @classmethod
    def convert_newlines(cls, v: str) -> str:
        """Convert literal \\n to actual newlines in private key"""
        if v:
            return v.replace("\\n", "\n")
        return v

    # HTTP
    coinbase_api_base_url: str = BASE_URL
    coinbase_request_timeout: float = DEFAULT_TIMEOUT
    coinbase_max_retries: int = DEFAULT_MAX_RETRIES

    # Token lifecycle
    oauth_refresh_margin_seconds: int = TOKEN_REFRESH_MARGIN

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
