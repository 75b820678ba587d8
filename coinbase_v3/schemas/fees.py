"""Fee tier and transaction summary Pydantic schemas"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class GoodsAndServicesTaxType(str, Enum):
    INCLUSIVE = "INCLUSIVE"
    EXCLUSIVE = "EXCLUSIVE"


class FeeTier(BaseModel):
    # Pricing tier is determined by notional (USD) volume.
    # usd_from / usd_to use commas as thousands separators ("10,000"), keep as str
    pricing_tier: str
    usd_from: str  # inclusive
    usd_to: str  # exclusive
    taker_fee_rate: Decimal
    maker_fee_rate: Decimal


class MarginRate(BaseModel):
    value: str


class GoodsAndServicesTax(BaseModel):
    rate: str
    type: GoodsAndServicesTaxType


class TransactionsSummary(BaseModel):
    """Fees and volumes for the user's fee tier. Volumes and fees are in USD."""

    total_volume: float
    total_fees: float
    fee_tier: FeeTier
    margin_rate: Optional[MarginRate] = None
    goods_and_services_tax: Optional[GoodsAndServicesTax] = None
    advanced_trade_only_volume: float = 0.0
    advanced_trade_only_fees: float = 0.0
    coinbase_pro_volume: float = 0.0
    coinbase_pro_fees: float = 0.0
