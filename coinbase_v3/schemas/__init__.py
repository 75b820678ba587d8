"""Pydantic models for Coinbase Advanced Trade requests and responses"""

from .accounts import Account, AccountResponse, AccountsResponse, AccountType, Balance
from .errors import CbRequestError, CbRequestErrorDetails
from .fees import FeeTier, GoodsAndServicesTax, GoodsAndServicesTaxType, MarginRate, TransactionsSummary
from .orders import (
    CancelOrderFailureReason,
    CancelOrderResponse,
    CancelOrdersResponse,
    CreateOrderFailureReason,
    CreateOrderResponse,
    Fill,
    FillsResponse,
    Limit,
    LiquidityIndicator,
    Market,
    Order,
    OrderConfiguration,
    OrderErrorResponse,
    OrderPlacementSource,
    OrderResponse,
    OrderSide,
    OrdersResponse,
    OrderSuccessResponse,
    OrderToSend,
    OrderType,
    PreviewCreateOrderFailureReason,
    RejectReason,
    Status,
    StopDirection,
    StopLimit,
    TimeInForce,
    TriggerStatus,
)
from .products import (
    Ask,
    Bid,
    Candle,
    CandlesResponse,
    ContractExpiryType,
    FcmTradingSessionDetails,
    FutureProductDetails,
    Granularity,
    MarketTrades,
    PerpetualDetails,
    Pricebook,
    PricebookResponse,
    PricebooksResponse,
    Product,
    ProductsResponse,
    ProductType,
    Side,
    Trade,
    TradeType,
)

__all__ = [
    # Account schemas
    "Account",
    "AccountResponse",
    "AccountsResponse",
    "AccountType",
    "Balance",
    # Error schemas
    "CbRequestError",
    "CbRequestErrorDetails",
    # Fee schemas
    "FeeTier",
    "GoodsAndServicesTax",
    "GoodsAndServicesTaxType",
    "MarginRate",
    "TransactionsSummary",
    # Order schemas
    "CancelOrderFailureReason",
    "CancelOrderResponse",
    "CancelOrdersResponse",
    "CreateOrderFailureReason",
    "CreateOrderResponse",
    "Fill",
    "FillsResponse",
    "Limit",
    "LiquidityIndicator",
    "Market",
    "Order",
    "OrderConfiguration",
    "OrderErrorResponse",
    "OrderPlacementSource",
    "OrderResponse",
    "OrderSide",
    "OrdersResponse",
    "OrderSuccessResponse",
    "OrderToSend",
    "OrderType",
    "PreviewCreateOrderFailureReason",
    "RejectReason",
    "Status",
    "StopDirection",
    "StopLimit",
    "TimeInForce",
    "TriggerStatus",
    # Product schemas
    "Ask",
    "Bid",
    "Candle",
    "CandlesResponse",
    "ContractExpiryType",
    "FcmTradingSessionDetails",
    "FutureProductDetails",
    "Granularity",
    "MarketTrades",
    "PerpetualDetails",
    "Pricebook",
    "PricebookResponse",
    "PricebooksResponse",
    "Product",
    "ProductsResponse",
    "ProductType",
    "Side",
    "Trade",
    "TradeType",
]
