"""
Shared test fixtures for coinbase_v3 tests.

Provides reusable fixtures for:
- Sample Coinbase response payloads
- Token providers that never touch the network
"""

import copy

import pytest

from coinbase_v3.auth import AccessTokenProvider

# ---------------------------------------------------------------------------
# Sample payloads (taken from the Coinbase API reference)
# ---------------------------------------------------------------------------

ACCOUNT = {
    "uuid": "9dd482e4-d8ce-46f7-a261-281843bd2855",
    "name": "SOL Wallet",
    "currency": "SOL",
    "available_balance": {"value": "70.313593992", "currency": "SOL"},
    "default": True,
    "active": True,
    "created_at": "2023-06-07T17:30:40.425Z",
    "deleted_at": None,
    "type": "ACCOUNT_TYPE_CRYPTO",
    "ready": True,
    "hold": {"value": "0", "currency": "SOL"},
}

PRODUCT = {
    "product_id": "BAT-ETH",
    "price": "",
    "volume_24h": "6",
    "volume_percentage_change_24h": "-99.40239043824701",
    "base_increment": "1",
    "quote_increment": "0.00000001",
    "quote_min_size": "0.0003",
    "quote_max_size": "2500",
    "base_min_size": "4.5",
    "base_max_size": "480000",
    "base_name": "Basic Attention Token",
    "quote_name": "Ethereum",
    "watched": False,
    "is_disabled": False,
    "new": False,
    "status": "online",
    "cancel_only": False,
    "limit_only": False,
    "post_only": False,
    "trading_disabled": False,
    "auction_mode": False,
    "product_type": "SPOT",
    "quote_currency_id": "ETH",
    "base_currency_id": "BAT",
    "fcm_trading_session_details": None,
    "mid_market_price": "",
    "alias": "ALIAS",
    "alias_to": ["ALIAS-TO"],
    "base_display_symbol": "BAT",
    "quote_display_symbol": "ETH",
    "view_only": False,
    "price_increment": "0.00000001",
}

PRICEBOOK = {
    "product_id": "QSP-USDT",
    "bids": [{"price": "0.01251", "size": "7448"}],
    "asks": [{"price": "0.0127", "size": "2850"}],
    "time": "2023-07-05T05:30:57.651784Z",
}

MARKET_TRADES = {
    "trades": [
        {
            "trade_id": "796313",
            "product_id": "OGN-BTC",
            "price": "0.00000318",
            "size": "1.48",
            "time": "2023-08-11T21:37:07.361937Z",
            "side": "BUY",
            "bid": "",
            "ask": "",
        },
        {
            "trade_id": "796311",
            "product_id": "OGN-BTC",
            "price": "0.00000318",
            "size": "6.06",
            "time": "2023-08-11T21:25:56.961648Z",
            "side": "SELL",
            "bid": "",
            "ask": "",
        },
    ],
    "best_bid": "0.00000318",
    "best_ask": "0.0000032",
}

ORDER = {
    "order_id": "0000-000000-000000",
    "product_id": "BTC-USD",
    "user_id": "2222-000000-000000",
    "order_configuration": {
        "limit_limit_gtc": {"base_size": "0.001", "limit_price": "10000.00", "post_only": False},
    },
    "side": "BUY",
    "client_order_id": "11111-000000-000000",
    "status": "OPEN",
    "time_in_force": "GOOD_UNTIL_CANCELLED",
    "created_time": "2021-05-31T09:59:59Z",
    "completion_percentage": "50",
    "filled_size": "0.001",
    "average_filled_price": "50",
    "fee": "string",
    "number_of_fills": "2",
    "filled_value": "10000",
    "pending_cancel": True,
    "size_in_quote": False,
    "total_fees": "5.00",
    "size_inclusive_of_fees": False,
    "total_value_after_fees": "string",
    "trigger_status": "UNKNOWN_TRIGGER_STATUS",
    "order_type": "LIMIT",
    "reject_reason": "REJECT_REASON_UNSPECIFIED",
    "settled": False,
    "product_type": "SPOT",
    "reject_message": "string",
    "cancel_message": "string",
    "order_placement_source": "RETAIL_ADVANCED",
    "outstanding_hold_amount": "string",
    "is_liquidation": False,
}

FILL = {
    "entry_id": "22222-2222222-22222222",
    "trade_id": "1111-11111-111111",
    "order_id": "0000-000000-000000",
    "trade_time": "2021-05-31T09:59:59Z",
    "trade_type": "FILL",
    "price": "10000.00",
    "size": "0.001",
    "commission": "1.25",
    "product_id": "BTC-USD",
    "sequence_timestamp": "2021-05-31T09:58:59.123456789Z",
    "liquidity_indicator": "MAKER",
    "size_in_quote": False,
    "user_id": "3333-333333-3333333",
    "side": "BUY",
}

TRANSACTIONS_SUMMARY = {
    "total_volume": 1000,
    "total_fees": 25,
    "fee_tier": {
        "pricing_tier": "<$10k",
        "usd_from": "0",
        "usd_to": "10,000",
        "taker_fee_rate": "0.0010",
        "maker_fee_rate": "0.0020",
    },
    "margin_rate": {"value": "string"},
    "goods_and_services_tax": {"rate": "string", "type": "INCLUSIVE"},
    "advanced_trade_only_volume": 1000,
    "advanced_trade_only_fees": 25,
    "coinbase_pro_volume": 1000,
    "coinbase_pro_fees": 25,
}

CB_ERROR = {
    "error": "NOT_FOUND",
    "code": 5,
    "message": "order with this orderID was not found",
    "details": {"type_url": "type.googleapis.com/coinbase.public_api.NotFound", "value": "Cg=="},
}


@pytest.fixture
def account_payload():
    return copy.deepcopy(ACCOUNT)


@pytest.fixture
def product_payload():
    return copy.deepcopy(PRODUCT)


@pytest.fixture
def pricebook_payload():
    return copy.deepcopy(PRICEBOOK)


@pytest.fixture
def market_trades_payload():
    return copy.deepcopy(MARKET_TRADES)


@pytest.fixture
def order_payload():
    return copy.deepcopy(ORDER)


@pytest.fixture
def fill_payload():
    return copy.deepcopy(FILL)


@pytest.fixture
def transactions_summary_payload():
    return copy.deepcopy(TRANSACTIONS_SUMMARY)


@pytest.fixture
def cb_error_payload():
    return copy.deepcopy(CB_ERROR)


# ---------------------------------------------------------------------------
# Token providers
# ---------------------------------------------------------------------------


class FakeTokenProvider(AccessTokenProvider):
    """Hands out numbered tokens; force_refresh() bumps the number when allowed."""

    def __init__(self, can_refresh: bool = False):
        self.can_refresh = can_refresh
        self.generation = 1
        self.calls = []

    async def access_token(self, method: str, path: str) -> str:
        self.calls.append((method, path))
        return f"token-{self.generation}"

    async def force_refresh(self) -> bool:
        if not self.can_refresh:
            return False
        self.generation += 1
        return True


@pytest.fixture
def token_provider():
    return FakeTokenProvider()


@pytest.fixture
def refreshing_token_provider():
    return FakeTokenProvider(can_refresh=True)
