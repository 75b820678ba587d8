"""
Order builders

Each function returns an OrderToSend ready for CbClient.create_order().
Nothing is sent to Coinbase here.
"""

import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Union

from coinbase_v3.exceptions import OrderValidationError
from coinbase_v3.schemas.orders import (
    Limit,
    Market,
    OrderConfiguration,
    OrderSide,
    OrderToSend,
    StopDirection,
    StopLimit,
)

Amount = Union[float, int, str, Decimal]


def _to_decimal(value: Amount, name: str) -> Decimal:
    """Convert an amount to Decimal; floats go through their shortest repr (0.1 -> Decimal("0.1"))."""
    if isinstance(value, bool):
        raise OrderValidationError(f"{name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise OrderValidationError(f"Could not convert {name}={value!r} to Decimal") from e
    if not result.is_finite():
        raise OrderValidationError(f"{name} must be finite, got {value!r}")
    return result


def _check_side(side: OrderSide) -> OrderSide:
    try:
        side = OrderSide(side)
    except ValueError as e:
        raise OrderValidationError(f"Order side should be BUY or SELL. Got: {side!r}") from e
    if side not in (OrderSide.BUY, OrderSide.SELL):
        raise OrderValidationError(f"Order side should be BUY or SELL. Got: {side.value}")
    return side


def _new_order(product_id: str, side: OrderSide, configuration: OrderConfiguration) -> OrderToSend:
    return OrderToSend(
        client_order_id=str(uuid.uuid4()),
        product_id=product_id,
        side=side,
        order_configuration=configuration,
    )


def create_market_order(product_id: str, side: OrderSide, order_size: Amount) -> OrderToSend:
    """
    Create a MARKET (immediate-or-cancel) order

    BUY orders spend `order_size` of the quote currency, SELL orders sell
    `order_size` of the base currency.
    """
    side = _check_side(side)
    size = _to_decimal(order_size, "order_size")

    if side == OrderSide.BUY:
        market = Market(quote_size=size)
    else:
        market = Market(base_size=size)

    return _new_order(product_id, side, OrderConfiguration(market_market_ioc=market))


def create_limit_order_good_til_canceled(
    product_id: str, side: OrderSide, base_size: Amount, limit_price: Amount, post_only: bool
) -> OrderToSend:
    """Create a LIMIT Good-Til-Canceled order for `base_size` at `limit_price`"""
    side = _check_side(side)
    limit = Limit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        post_only=post_only,
    )
    return _new_order(product_id, side, OrderConfiguration(limit_limit_gtc=limit))


def create_limit_order_good_til_date(
    product_id: str, side: OrderSide, base_size: Amount, limit_price: Amount, end_time: datetime, post_only: bool
) -> OrderToSend:
    """Create a LIMIT Good-Til-Date order; it expires at `end_time`"""
    side = _check_side(side)
    limit = Limit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        end_time=end_time,
        post_only=post_only,
    )
    return _new_order(product_id, side, OrderConfiguration(limit_limit_gtd=limit))


def create_stop_limit_order_good_til_canceled(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    stop_price: Amount,
    stop_direction: StopDirection,
) -> OrderToSend:
    """
    Create a STOP-LIMIT Good-Til-Canceled order

    A limit order at `limit_price` is placed once the last trade price crosses
    `stop_price` in `stop_direction`.
    """
    side = _check_side(side)
    stop_limit = StopLimit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        stop_price=_to_decimal(stop_price, "stop_price"),
        stop_direction=stop_direction,
    )
    return _new_order(product_id, side, OrderConfiguration(stop_limit_stop_limit_gtc=stop_limit))


def create_stop_limit_order_good_til_date(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    stop_price: Amount,
    end_time: datetime,
    stop_direction: StopDirection,
) -> OrderToSend:
    """Create a STOP-LIMIT Good-Til-Date order; it expires at `end_time`"""
    side = _check_side(side)
    stop_limit = StopLimit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        stop_price=_to_decimal(stop_price, "stop_price"),
        stop_direction=stop_direction,
        end_time=end_time,
    )
    return _new_order(product_id, side, OrderConfiguration(stop_limit_stop_limit_gtd=stop_limit))
