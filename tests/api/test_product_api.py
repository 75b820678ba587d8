"""
Tests for coinbase_v3/api/product_api.py

Covers products, pricebooks, candles and market trades.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock

from coinbase_v3.api.product_api import (
    get_best_bid_ask,
    get_market_trades,
    get_product,
    get_product_book,
    get_product_candles,
    list_products,
)
from coinbase_v3.exceptions import DeserializationError
from coinbase_v3.schemas import ContractExpiryType, Granularity, ProductType


# ---------------------------------------------------------------------------
# get_best_bid_ask
# ---------------------------------------------------------------------------


class TestGetBestBidAsk:
    """Tests for get_best_bid_ask()"""

    @pytest.mark.asyncio
    async def test_all_products(self, pricebook_payload):
        mock_request = AsyncMock(return_value={"pricebooks": [pricebook_payload]})

        pricebooks = await get_best_bid_ask(mock_request)

        assert pricebooks[0].product_id == "QSP-USDT"
        mock_request.assert_called_once_with("GET", "/api/v3/brokerage/best_bid_ask", params=[])

    @pytest.mark.asyncio
    async def test_product_ids_repeat_key(self, pricebook_payload):
        mock_request = AsyncMock(return_value={"pricebooks": [pricebook_payload]})

        await get_best_bid_ask(mock_request, ["OGN-BTC", "WCFG-USD"])

        assert mock_request.call_args.kwargs["params"] == [("product_ids", "OGN-BTC"), ("product_ids", "WCFG-USD")]


# ---------------------------------------------------------------------------
# get_product_book
# ---------------------------------------------------------------------------


class TestGetProductBook:
    """Tests for get_product_book()"""

    @pytest.mark.asyncio
    async def test_with_limit(self, pricebook_payload):
        mock_request = AsyncMock(return_value={"pricebook": pricebook_payload})

        book = await get_product_book(mock_request, "QSP-USDT", limit=3)

        assert book.bids[0].size == Decimal("7448")
        mock_request.assert_called_once_with(
            "GET", "/api/v3/brokerage/product_book", params=[("product_id", "QSP-USDT"), ("limit", "3")]
        )


# ---------------------------------------------------------------------------
# list_products / get_product
# ---------------------------------------------------------------------------


class TestListProducts:
    """Tests for list_products()"""

    @pytest.mark.asyncio
    async def test_filters_encoded(self, product_payload):
        mock_request = AsyncMock(return_value={"products": [product_payload], "num_products": 1})

        products = await list_products(
            mock_request,
            limit=4,
            offset=4,
            product_type=ProductType.FUTURE,
            product_ids=["BAT-ETH"],
            contract_expiry_type=ContractExpiryType.EXPIRING,
        )

        assert products[0].product_id == "BAT-ETH"
        assert mock_request.call_args.kwargs["params"] == [
            ("limit", "4"),
            ("offset", "4"),
            ("product_type", "FUTURE"),
            ("product_ids", "BAT-ETH"),
            ("contract_expiry_type", "EXPIRING"),
        ]

    @pytest.mark.asyncio
    async def test_no_filters(self):
        mock_request = AsyncMock(return_value={"products": []})

        assert await list_products(mock_request) == []
        assert mock_request.call_args.kwargs["params"] == []


class TestGetProduct:
    """Tests for get_product()"""

    @pytest.mark.asyncio
    async def test_unwrapped_product(self, product_payload):
        """Happy path: the product endpoint returns the product itself."""
        mock_request = AsyncMock(return_value=product_payload)

        product = await get_product(mock_request, "BAT-ETH")

        assert product.base_name == "Basic Attention Token"
        mock_request.assert_called_once_with("GET", "/api/v3/brokerage/products/BAT-ETH")

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        mock_request = AsyncMock(return_value={"product": "nope"})

        with pytest.raises(DeserializationError):
            await get_product(mock_request, "BAT-ETH")


# ---------------------------------------------------------------------------
# get_product_candles
# ---------------------------------------------------------------------------


class TestGetProductCandles:
    """Tests for get_product_candles()"""

    @pytest.mark.asyncio
    async def test_start_end_sent_as_unix_seconds(self):
        mock_request = AsyncMock(
            return_value={
                "candles": [
                    {
                        "start": "1639508050",
                        "low": "140.21",
                        "high": "140.21",
                        "open": "140.21",
                        "close": "140.21",
                        "volume": "56437345",
                    }
                ]
            }
        )
        start = datetime(2021, 12, 14, 18, 54, 10, tzinfo=timezone.utc)
        end = datetime(2021, 12, 14, 19, 54, 10, tzinfo=timezone.utc)

        candles = await get_product_candles(mock_request, "BTC-USD", start, end, Granularity.FIVE_MINUTE)

        assert len(candles) == 1
        mock_request.assert_called_once_with(
            "GET",
            "/api/v3/brokerage/products/BTC-USD/candles",
            params=[("start", "1639508050"), ("end", "1639511650"), ("granularity", "FIVE_MINUTE")],
        )


# ---------------------------------------------------------------------------
# get_market_trades
# ---------------------------------------------------------------------------


class TestGetMarketTrades:
    """Tests for get_market_trades()"""

    @pytest.mark.asyncio
    async def test_returns_trades_and_best_prices(self, market_trades_payload):
        mock_request = AsyncMock(return_value=market_trades_payload)

        trades = await get_market_trades(mock_request, "OGN-BTC", 2)

        assert len(trades.trades) == 2
        assert trades.best_ask == Decimal("0.0000032")
        mock_request.assert_called_once_with(
            "GET", "/api/v3/brokerage/products/OGN-BTC/ticker", params=[("limit", "2")]
        )
