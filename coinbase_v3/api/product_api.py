"""
Market data operations for Coinbase API
Handles products, pricebooks, candles and market trades
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from coinbase_v3.constants import API_PREFIX
from coinbase_v3.schemas.common import to_unix_seconds
from coinbase_v3.schemas.products import (
    Candle,
    CandlesResponse,
    ContractExpiryType,
    Granularity,
    MarketTrades,
    Pricebook,
    PricebookResponse,
    PricebooksResponse,
    Product,
    ProductsResponse,
    ProductType,
)
from coinbase_v3.utils import parse_response, query_params

logger = logging.getLogger(__name__)


async def get_best_bid_ask(request_func: Callable, product_ids: Optional[List[str]] = None) -> List[Pricebook]:
    """
    Get the best bid/ask for all products, or only for `product_ids`

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getbestbidask
    """
    result = await request_func("GET", f"{API_PREFIX}/best_bid_ask", params=query_params(product_ids=product_ids))
    return parse_response(PricebooksResponse, result).pricebooks


async def get_product_book(request_func: Callable, product_id: str, limit: Optional[int] = None) -> Pricebook:
    """
    Get bids/asks for a single product; `limit` caps the depth returned

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getproductbook
    """
    result = await request_func(
        "GET", f"{API_PREFIX}/product_book", params=query_params(product_id=product_id, limit=limit)
    )
    return parse_response(PricebookResponse, result).pricebook


async def list_products(
    request_func: Callable,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    product_type: Optional[ProductType] = None,
    product_ids: Optional[List[str]] = None,
    contract_expiry_type: Optional[ContractExpiryType] = None,
) -> List[Product]:
    """
    Get the available currency pairs for trading

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getproducts
    """
    params = query_params(
        limit=limit,
        offset=offset,
        product_type=product_type,
        product_ids=product_ids,
        contract_expiry_type=contract_expiry_type,
    )
    result = await request_func("GET", f"{API_PREFIX}/products", params=params)
    response = parse_response(ProductsResponse, result)
    logger.debug(f"Fetched {len(response.products)} products")
    return response.products


async def get_product(request_func: Callable, product_id: str) -> Product:
    """
    Get a single product by id

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getproduct
    """
    # Unlike the other endpoints, the product is not wrapped in an envelope
    result = await request_func("GET", f"{API_PREFIX}/products/{product_id}")
    return parse_response(Product, result)


async def get_product_candles(
    request_func: Callable, product_id: str, start: datetime, end: datetime, granularity: Granularity
) -> List[Candle]:
    """
    Get rates for a single product, grouped in `granularity` buckets

    start and end are sent as UNIX timestamps (seconds).

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getcandles
    """
    params = query_params(start=to_unix_seconds(start), end=to_unix_seconds(end), granularity=granularity)
    result = await request_func("GET", f"{API_PREFIX}/products/{product_id}/candles", params=params)
    return parse_response(CandlesResponse, result).candles


async def get_market_trades(request_func: Callable, product_id: str, limit: int) -> MarketTrades:
    """
    Get the last `limit` trades (ticks) of a product, with best bid/ask

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getmarkettrades
    """
    result = await request_func("GET", f"{API_PREFIX}/products/{product_id}/ticker", params=query_params(limit=limit))
    return parse_response(MarketTrades, result)
