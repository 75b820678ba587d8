"""
Helpers shared by the endpoint modules: query encoding, response parsing,
and environment lookup for the example scripts
"""

import logging
import os
from datetime import datetime
from enum import Enum
from typing import Any, List, Tuple, Type, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from coinbase_v3.exceptions import CoinbaseApiError, ConfigurationError, DeserializationError
from coinbase_v3.schemas.common import format_datetime
from coinbase_v3.schemas.errors import CbRequestError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

OAUTH_ENV_VARIABLES = ("CB_OAUTH_CLIENT_ID", "CB_OAUTH_CLIENT_SECRET", "CB_OAUTH_REDIRECT_URL")


def get_env_variables() -> Tuple[str, str, str]:
    """
    Get client_id, client_secret and redirect_url from the environment

    A .env file in the working directory is loaded first if present.

    Returns:
        Tuple of (CB_OAUTH_CLIENT_ID, CB_OAUTH_CLIENT_SECRET, CB_OAUTH_REDIRECT_URL)
    """
    load_dotenv()

    values = []
    for name in OAUTH_ENV_VARIABLES:
        value = os.getenv(name)
        if not value:
            raise ConfigurationError(f"Missing the {name} environment variable")
        values.append(value)

    return values[0], values[1], values[2]


def _encode_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_datetime(value)
    return str(value)


def query_params(**kwargs: Any) -> List[Tuple[str, str]]:
    """
    Encode keyword arguments as query parameters, in order.

    None values are dropped and lists repeat their key once per element, e.g.
    query_params(product_ids=["BTC-USD", "ETH-USD"], limit=None)
    -> [("product_ids", "BTC-USD"), ("product_ids", "ETH-USD")]
    """
    params: List[Tuple[str, str]] = []
    for key, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            params.extend((key, _encode_scalar(item)) for item in value)
        else:
            params.append((key, _encode_scalar(value)))
    return params


def parse_response(model: Type[ModelT], result: Any) -> ModelT:
    """
    Validate a decoded JSON body into `model`.

    A body that does not match but is a Coinbase error payload raises
    CoinbaseApiError; anything else raises DeserializationError.
    """
    try:
        return model.model_validate(result)
    except ValidationError as e:
        try:
            error = CbRequestError.model_validate(result)
        except ValidationError:
            logger.error(f"❌ Unexpected {model.__name__} payload: {e}")
            raise DeserializationError(f"Cannot parse {model.__name__}: {e}") from e
        raise CoinbaseApiError(error) from e
