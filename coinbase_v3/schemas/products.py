"""Product, pricebook, candle and market trade Pydantic schemas"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from coinbase_v3.schemas.common import StableDecimal, UtcDateTime


class ProductType(str, Enum):
    SPOT = "SPOT"
    FUTURE = "FUTURE"


class ContractExpiryType(str, Enum):
    UNKNOWN_CONTRACT_EXPIRY_TYPE = "UNKNOWN_CONTRACT_EXPIRY_TYPE"
    UNKNOWN_RISK_MANAGEMENT_TYPE = "UNKNOWN_RISK_MANAGEMENT_TYPE"
    EXPIRING = "EXPIRING"
    PERPETUAL = "PERPETUAL"


class Granularity(str, Enum):
    """Candle bucket sizes"""

    UNKNOWN_GRANULARITY = "UNKNOWN_GRANULARITY"
    ONE_MINUTE = "ONE_MINUTE"
    FIVE_MINUTE = "FIVE_MINUTE"
    FIFTEEN_MINUTE = "FIFTEEN_MINUTE"
    THIRTY_MINUTE = "THIRTY_MINUTE"
    ONE_HOUR = "ONE_HOUR"
    TWO_HOUR = "TWO_HOUR"
    SIX_HOUR = "SIX_HOUR"
    ONE_DAY = "ONE_DAY"


class Side(str, Enum):
    """Trade / order side. Also exported as OrderSide."""

    UNKNOWN_ORDER_SIDE = "UNKNOWN_ORDER_SIDE"
    BUY = "BUY"
    SELL = "SELL"


class TradeType(str, Enum):
    FILL = "FILL"
    REVERSAL = "REVERSAL"
    CORRECTION = "CORRECTION"
    SYNTHETIC = "SYNTHETIC"


# ---------------------------------------------------------------------------
# Pricebooks
# ---------------------------------------------------------------------------


class Bid(BaseModel):
    price: Decimal
    size: Decimal


class Ask(BaseModel):
    price: Decimal
    size: Decimal


class Pricebook(BaseModel):
    product_id: str
    bids: List[Bid]
    asks: List[Ask]
    time: Optional[UtcDateTime] = None


class PricebooksResponse(BaseModel):
    pricebooks: List[Pricebook]


class PricebookResponse(BaseModel):
    pricebook: Pricebook


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class FcmTradingSessionDetails(BaseModel):
    is_session_open: bool
    open_time: Optional[UtcDateTime] = None
    close_time: Optional[UtcDateTime] = None


class PerpetualDetails(BaseModel):
    open_interest: str = ""
    funding_rate: str = ""
    funding_time: Optional[UtcDateTime] = None


class FutureProductDetails(BaseModel):
    venue: str = ""
    contract_code: str = ""
    contract_expiry: Optional[UtcDateTime] = None
    contract_size: str = ""
    contract_root_unit: str = ""
    group_description: str = ""  # e.g. "Nano Bitcoin Futures"
    contract_expiry_timezone: str = ""
    group_short_description: str = ""  # e.g. "Nano BTC"
    risk_managed_by: str = ""  # UNKNOWN_RISK_MANAGEMENT_TYPE, MANAGED_BY_FCM, MANAGED_BY_VENUE
    contract_expiry_type: str = ""  # UNKNOWN_CONTRACT_EXPIRY_TYPE, EXPIRING, PERPETUAL
    perpetual_details: Optional[PerpetualDetails] = None
    contract_display_name: str = ""


class Product(BaseModel):
    """
    A tradable product (currency pair or future).

    price, the 24h changes and volume_24h are None when Coinbase sends "".
    """

    product_id: str
    price: StableDecimal = None
    price_percentage_change_24h: StableDecimal = None
    volume_24h: StableDecimal = None
    volume_percentage_change_24h: StableDecimal = None
    base_increment: Decimal
    quote_increment: Decimal
    quote_min_size: Decimal
    quote_max_size: Decimal
    base_min_size: Decimal
    base_max_size: Decimal
    base_name: str = ""
    quote_name: str = ""
    watched: bool = False
    is_disabled: bool = False
    new: bool = False
    status: str = ""
    cancel_only: bool = False
    limit_only: bool = False
    post_only: bool = False
    trading_disabled: bool = False
    auction_mode: bool = False
    product_type: ProductType
    quote_currency_id: str = ""
    base_currency_id: str = ""
    fcm_trading_session_details: Optional[FcmTradingSessionDetails] = None
    mid_market_price: StableDecimal = None
    alias: str = ""
    alias_to: List[str] = []
    base_display_symbol: str = ""
    quote_display_symbol: str = ""
    view_only: bool = False
    price_increment: Optional[Decimal] = None
    future_product_details: Optional[FutureProductDetails] = None


class ProductsResponse(BaseModel):
    products: List[Product]
    num_products: int = 0


# ---------------------------------------------------------------------------
# Candles & trades
# ---------------------------------------------------------------------------


class Candle(BaseModel):
    start: str  # bucket start, UNIX seconds
    low: Decimal
    high: Decimal
    open: Decimal
    close: Decimal
    volume: Decimal


class CandlesResponse(BaseModel):
    candles: List[Candle]


class Trade(BaseModel):
    trade_id: str
    product_id: str
    price: Decimal
    size: Decimal
    time: UtcDateTime
    side: Side
    # Coinbase sends "" here, so these stay strings
    bid: Optional[str] = None
    ask: Optional[str] = None


class MarketTrades(BaseModel):
    trades: List[Trade]
    best_bid: StableDecimal = None
    best_ask: StableDecimal = None
