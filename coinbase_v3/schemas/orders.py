"""Order, fill, and order-request Pydantic schemas"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from coinbase_v3.schemas.common import ApiDecimal, UtcDateTime
from coinbase_v3.schemas.products import ProductType, Side, TradeType

OrderSide = Side


class StopDirection(str, Enum):
    UNKNOWN_STOP_DIRECTION = "UNKNOWN_STOP_DIRECTION"
    STOP_DIRECTION_STOP_UP = "STOP_DIRECTION_STOP_UP"
    STOP_DIRECTION_STOP_DOWN = "STOP_DIRECTION_STOP_DOWN"


class Status(str, Enum):
    OPEN = "OPEN"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"
    UNKNOWN_ORDER_STATUS = "UNKNOWN_ORDER_STATUS"


class TimeInForce(str, Enum):
    UNKNOWN_TIME_IN_FORCE = "UNKNOWN_TIME_IN_FORCE"
    GOOD_UNTIL_DATE_TIME = "GOOD_UNTIL_DATE_TIME"
    GOOD_UNTIL_CANCELLED = "GOOD_UNTIL_CANCELLED"
    IMMEDIATE_OR_CANCEL = "IMMEDIATE_OR_CANCEL"
    FILL_OR_KILL = "FILL_OR_KILL"


class TriggerStatus(str, Enum):
    UNKNOWN_TRIGGER_STATUS = "UNKNOWN_TRIGGER_STATUS"
    INVALID_ORDER_TYPE = "INVALID_ORDER_TYPE"
    STOP_PENDING = "STOP_PENDING"
    STOP_TRIGGERED = "STOP_TRIGGERED"


class OrderType(str, Enum):
    UNKNOWN_ORDER_TYPE = "UNKNOWN_ORDER_TYPE"
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"
    STOP_LIMIT = "STOP_LIMIT"


class RejectReason(str, Enum):
    REJECT_REASON_UNSPECIFIED = "REJECT_REASON_UNSPECIFIED"


class OrderPlacementSource(str, Enum):
    RETAIL_SIMPLE = "RETAIL_SIMPLE"
    RETAIL_ADVANCED = "RETAIL_ADVANCED"


class LiquidityIndicator(str, Enum):
    UNKNOWN_LIQUIDITY_INDICATOR = "UNKNOWN_LIQUIDITY_INDICATOR"
    MAKER = "MAKER"
    TAKER = "TAKER"


class CreateOrderFailureReason(str, Enum):
    UNKNOWN_FAILURE_REASON = "UNKNOWN_FAILURE_REASON"
    UNSUPPORTED_ORDER_CONFIGURATION = "UNSUPPORTED_ORDER_CONFIGURATION"
    INVALID_SIDE = "INVALID_SIDE"
    INVALID_PRODUCT_ID = "INVALID_PRODUCT_ID"
    INVALID_SIZE_PRECISION = "INVALID_SIZE_PRECISION"
    INVALID_PRICE_PRECISION = "INVALID_PRICE_PRECISION"
    INSUFFICIENT_FUND = "INSUFFICIENT_FUND"
    INVALID_LEDGER_BALANCE = "INVALID_LEDGER_BALANCE"
    ORDER_ENTRY_DISABLED = "ORDER_ENTRY_DISABLED"
    INELIGIBLE_PAIR = "INELIGIBLE_PAIR"
    INVALID_LIMIT_PRICE_POST_ONLY = "INVALID_LIMIT_PRICE_POST_ONLY"
    INVALID_LIMIT_PRICE = "INVALID_LIMIT_PRICE"
    INVALID_NO_LIQUIDITY = "INVALID_NO_LIQUIDITY"
    INVALID_REQUEST = "INVALID_REQUEST"
    COMMANDER_REJECTED_NEW_ORDER = "COMMANDER_REJECTED_NEW_ORDER"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


class PreviewCreateOrderFailureReason(str, Enum):
    UNKNOWN_PREVIEW_FAILURE_REASON = "UNKNOWN_PREVIEW_FAILURE_REASON"
    PREVIEW_MISSING_COMMISSION_RATE = "PREVIEW_MISSING_COMMISSION_RATE"
    PREVIEW_INVALID_SIDE = "PREVIEW_INVALID_SIDE"
    PREVIEW_INVALID_ORDER_CONFIG = "PREVIEW_INVALID_ORDER_CONFIG"
    PREVIEW_INVALID_PRODUCT_ID = "PREVIEW_INVALID_PRODUCT_ID"
    PREVIEW_INVALID_SIZE_PRECISION = "PREVIEW_INVALID_SIZE_PRECISION"
    PREVIEW_INVALID_PRICE_PRECISION = "PREVIEW_INVALID_PRICE_PRECISION"
    PREVIEW_MISSING_PRODUCT_PRICE_BOOK = "PREVIEW_MISSING_PRODUCT_PRICE_BOOK"
    PREVIEW_INVALID_LEDGER_BALANCE = "PREVIEW_INVALID_LEDGER_BALANCE"
    PREVIEW_INSUFFICIENT_LEDGER_BALANCE = "PREVIEW_INSUFFICIENT_LEDGER_BALANCE"
    PREVIEW_INVALID_LIMIT_PRICE_POST_ONLY = "PREVIEW_INVALID_LIMIT_PRICE_POST_ONLY"
    PREVIEW_INVALID_LIMIT_PRICE = "PREVIEW_INVALID_LIMIT_PRICE"
    PREVIEW_INVALID_NO_LIQUIDITY = "PREVIEW_INVALID_NO_LIQUIDITY"
    PREVIEW_INSUFFICIENT_FUND = "PREVIEW_INSUFFICIENT_FUND"
    PREVIEW_INVALID_COMMISSION_CONFIGURATION = "PREVIEW_INVALID_COMMISSION_CONFIGURATION"
    PREVIEW_INVALID_STOP_PRICE = "PREVIEW_INVALID_STOP_PRICE"
    PREVIEW_INVALID_BASE_SIZE_TOO_LARGE = "PREVIEW_INVALID_BASE_SIZE_TOO_LARGE"
    PREVIEW_INVALID_BASE_SIZE_TOO_SMALL = "PREVIEW_INVALID_BASE_SIZE_TOO_SMALL"
    PREVIEW_INVALID_QUOTE_SIZE_PRECISION = "PREVIEW_INVALID_QUOTE_SIZE_PRECISION"
    PREVIEW_INVALID_QUOTE_SIZE_TOO_LARGE = "PREVIEW_INVALID_QUOTE_SIZE_TOO_LARGE"
    PREVIEW_INVALID_PRICE_TOO_LARGE = "PREVIEW_INVALID_PRICE_TOO_LARGE"
    PREVIEW_INVALID_QUOTE_SIZE_TOO_SMALL = "PREVIEW_INVALID_QUOTE_SIZE_TOO_SMALL"
    PREVIEW_INSUFFICIENT_FUNDS_FOR_FUTURES = "PREVIEW_INSUFFICIENT_FUNDS_FOR_FUTURES"
    PREVIEW_BREACHED_PRICE_LIMIT = "PREVIEW_BREACHED_PRICE_LIMIT"
    PREVIEW_BREACHED_ACCOUNT_POSITION_LIMIT = "PREVIEW_BREACHED_ACCOUNT_POSITION_LIMIT"
    PREVIEW_BREACHED_COMPANY_POSITION_LIMIT = "PREVIEW_BREACHED_COMPANY_POSITION_LIMIT"
    PREVIEW_INVALID_MARGIN_HEALTH = "PREVIEW_INVALID_MARGIN_HEALTH"
    PREVIEW_RISK_PROXY_FAILURE = "PREVIEW_RISK_PROXY_FAILURE"
    PREVIEW_UNTRADABLE_FCM_ACCOUNT_STATUS = "PREVIEW_UNTRADABLE_FCM_ACCOUNT_STATUS"


class CancelOrderFailureReason(str, Enum):
    UNKNOWN_CANCEL_FAILURE_REASON = "UNKNOWN_CANCEL_FAILURE_REASON"
    INVALID_CANCEL_REQUEST = "INVALID_CANCEL_REQUEST"
    UNKNOWN_CANCEL_ORDER = "UNKNOWN_CANCEL_ORDER"
    COMMANDER_REJECTED_CANCEL_ORDER = "COMMANDER_REJECTED_CANCEL_ORDER"
    DUPLICATE_CANCEL_REQUEST = "DUPLICATE_CANCEL_REQUEST"


# ---------------------------------------------------------------------------
# Order configuration
# ---------------------------------------------------------------------------


class Market(BaseModel):
    quote_size: Optional[ApiDecimal] = None  # quote currency to spend, BUY orders
    base_size: Optional[ApiDecimal] = None  # base currency to sell, SELL orders


class Limit(BaseModel):
    """end_time is only used for GTD orders"""

    base_size: ApiDecimal
    limit_price: ApiDecimal
    end_time: Optional[UtcDateTime] = None
    post_only: Optional[bool] = None


class StopLimit(BaseModel):
    """
    Stop-limit order configuration.

    The order triggers when the last trade price goes above stop_price
    (STOP_UP) or below it (STOP_DOWN).
    """

    base_size: ApiDecimal
    limit_price: ApiDecimal
    stop_price: ApiDecimal
    stop_direction: StopDirection
    end_time: Optional[UtcDateTime] = None


class OrderConfiguration(BaseModel):
    """
    Exactly one member is normally set.

    Kept as optional fields rather than a union so that responses carrying
    several sample configurations still deserialize.
    """

    market_market_ioc: Optional[Market] = None
    limit_limit_gtc: Optional[Limit] = None
    limit_limit_gtd: Optional[Limit] = None
    stop_limit_stop_limit_gtc: Optional[StopLimit] = None
    stop_limit_stop_limit_gtd: Optional[StopLimit] = None


# ---------------------------------------------------------------------------
# Historical orders & fills
# ---------------------------------------------------------------------------


class Order(BaseModel):
    order_id: str
    product_id: str
    user_id: str = ""
    order_configuration: OrderConfiguration
    side: OrderSide
    client_order_id: str = ""
    status: Status
    time_in_force: TimeInForce = TimeInForce.UNKNOWN_TIME_IN_FORCE
    created_time: UtcDateTime
    completion_percentage: str = ""
    filled_size: str = ""
    average_filled_price: str = ""
    fee: str = ""
    number_of_fills: str = ""
    filled_value: str = ""
    pending_cancel: bool = False
    size_in_quote: bool = False
    total_fees: str = ""
    size_inclusive_of_fees: bool = False
    # filled_value + total_fees for buys, filled_value - total_fees for sells
    total_value_after_fees: str = ""
    trigger_status: TriggerStatus = TriggerStatus.UNKNOWN_TRIGGER_STATUS
    order_type: OrderType = OrderType.UNKNOWN_ORDER_TYPE
    reject_reason: Optional[RejectReason] = None
    settled: bool = False
    product_type: ProductType = ProductType.SPOT
    reject_message: Optional[str] = None
    cancel_message: Optional[str] = None
    order_placement_source: Optional[OrderPlacementSource] = None
    # 0 if the hold was released
    outstanding_hold_amount: str = ""
    is_liquidation: bool = False


class OrderResponse(BaseModel):
    order: Order


class OrdersResponse(BaseModel):
    orders: List[Order]
    sequence: Optional[str] = None
    has_next: bool
    cursor: str = ""


class Fill(BaseModel):
    entry_id: str
    trade_id: str  # not unique for adjusted fills
    order_id: str
    trade_time: UtcDateTime
    trade_type: TradeType
    price: str
    size: str
    commission: str
    product_id: str
    sequence_timestamp: UtcDateTime
    liquidity_indicator: LiquidityIndicator
    size_in_quote: bool
    user_id: str
    side: OrderSide


class FillsResponse(BaseModel):
    # No has_next here: an empty cursor marks the last page
    fills: List[Fill]
    cursor: str = ""


# ---------------------------------------------------------------------------
# Order requests & responses
# ---------------------------------------------------------------------------


class OrderToSend(BaseModel):
    """Body of a create-order request. Build one with coinbase_v3.orders."""

    client_order_id: str
    product_id: str
    side: OrderSide
    order_configuration: OrderConfiguration

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset configuration members left out"""
        return self.model_dump(mode="json", exclude_none=True)


class OrderSuccessResponse(BaseModel):
    order_id: str
    product_id: str
    side: OrderSide
    client_order_id: str


class OrderErrorResponse(BaseModel):
    error: Optional[CreateOrderFailureReason] = None
    message: str = ""
    error_details: str = ""
    preview_failure_reason: Optional[PreviewCreateOrderFailureReason] = None
    new_order_failure_reason: Optional[CreateOrderFailureReason] = None


class CreateOrderResponse(BaseModel):
    success: bool
    failure_reason: Optional[CreateOrderFailureReason] = None
    order_id: str = ""
    success_response: Optional[OrderSuccessResponse] = None
    error_response: Optional[OrderErrorResponse] = None
    order_configuration: Optional[OrderConfiguration] = None


class CancelOrderResponse(BaseModel):
    success: bool
    failure_reason: Optional[CancelOrderFailureReason] = None
    order_id: str


class CancelOrdersResponse(BaseModel):
    results: List[CancelOrderResponse]
