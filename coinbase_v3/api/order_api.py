"""
Order operations for Coinbase API
Handles historical orders and fills, order creation and cancellation
"""

import logging
from datetime import datetime
from typing import AsyncIterator, Callable, List, Optional

from coinbase_v3.constants import API_PREFIX
from coinbase_v3.schemas.orders import (
    CancelOrderResponse,
    CancelOrdersResponse,
    CreateOrderResponse,
    Fill,
    FillsResponse,
    Order,
    OrderPlacementSource,
    OrderResponse,
    OrderSide,
    OrdersResponse,
    OrderToSend,
    OrderType,
    Status,
)
from coinbase_v3.schemas.products import ContractExpiryType, ProductType
from coinbase_v3.utils import parse_response, query_params

logger = logging.getLogger(__name__)


async def list_orders(
    request_func: Callable,
    product_id: Optional[str] = None,
    order_status: Optional[List[Status]] = None,
    limit: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    deprecated_user_native_currency: Optional[str] = None,
    order_type: Optional[OrderType] = None,
    order_side: Optional[OrderSide] = None,
    cursor: Optional[str] = None,
    product_type: Optional[ProductType] = None,
    order_placement_source: Optional[OrderPlacementSource] = None,
    contract_expiry_type: Optional[ContractExpiryType] = None,
) -> AsyncIterator[List[Order]]:
    """
    List historical orders as a stream of batches

    Follows the returned cursor while Coinbase reports has_next.

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_gethistoricalorders
    """
    page_count = 0
    while True:
        params = query_params(
            product_id=product_id,
            order_status=order_status,
            limit=limit,
            start_date=start_date,
            end_date=end_date,
            deprecated_user_native_currency=deprecated_user_native_currency,
            order_type=order_type,
            order_side=order_side,
            cursor=cursor,
            product_type=product_type,
            order_placement_source=order_placement_source,
            contract_expiry_type=contract_expiry_type,
        )
        result = await request_func("GET", f"{API_PREFIX}/orders/historical/batch", params=params)
        response = parse_response(OrdersResponse, result)
        page_count += 1
        logger.debug(f"Fetched orders page {page_count}: {len(response.orders)} orders")

        yield response.orders

        if not response.has_next or not response.cursor:
            break
        cursor = response.cursor


async def list_fills(
    request_func: Callable,
    order_id: Optional[str] = None,
    product_id: Optional[str] = None,
    start_sequence_timestamp: Optional[datetime] = None,
    end_sequence_timestamp: Optional[datetime] = None,
    limit: Optional[int] = None,
    cursor: Optional[str] = None,
) -> AsyncIterator[List[Fill]]:
    """
    List fills as a stream of batches

    The fills endpoint has no has_next flag: paging stops on an empty cursor.

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getfills
    """
    page_count = 0
    while True:
        params = query_params(
            order_id=order_id,
            product_id=product_id,
            start_sequence_timestamp=start_sequence_timestamp,
            end_sequence_timestamp=end_sequence_timestamp,
            limit=limit,
            cursor=cursor,
        )
        result = await request_func("GET", f"{API_PREFIX}/orders/historical/fills", params=params)
        response = parse_response(FillsResponse, result)
        page_count += 1
        logger.debug(f"Fetched fills page {page_count}: {len(response.fills)} fills")

        yield response.fills

        if not response.cursor:
            break
        cursor = response.cursor


async def get_order(request_func: Callable, order_id: str) -> Order:
    """
    Get a single order by id

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_gethistoricalorder
    """
    result = await request_func("GET", f"{API_PREFIX}/orders/historical/{order_id}")
    return parse_response(OrderResponse, result).order


async def create_order(request_func: Callable, order: OrderToSend) -> CreateOrderResponse:
    """
    Place an order built with coinbase_v3.orders

    Warning: this trades real funds.

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_postorder
    """
    logger.info(f"Placing {order.side.value} order on {order.product_id} (client_order_id={order.client_order_id})")
    result = await request_func("POST", f"{API_PREFIX}/orders", data=order.to_payload())
    response = parse_response(CreateOrderResponse, result)

    if not response.success:
        logger.warning(
            f"⚠️  Order on {order.product_id} rejected: "
            f"{response.failure_reason.value if response.failure_reason else 'unknown reason'}"
        )
    return response


async def cancel_order(request_func: Callable, order_ids: List[str]) -> List[CancelOrderResponse]:
    """
    Request cancellation of one or more orders

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_cancelorders
    """
    result = await request_func("POST", f"{API_PREFIX}/orders/batch_cancel", data={"order_ids": list(order_ids)})
    return parse_response(CancelOrdersResponse, result).results
