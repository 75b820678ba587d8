"""
Tests for coinbase_v3/api/order_api.py

Covers historical orders and fills pagination, order lookup,
order creation and cancellation.
"""

from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock

from coinbase_v3.api.order_api import cancel_order, create_order, get_order, list_fills, list_orders
from coinbase_v3.exceptions import CoinbaseApiError
from coinbase_v3.orders import create_market_order
from coinbase_v3.schemas import (
    ContractExpiryType,
    CreateOrderFailureReason,
    OrderPlacementSource,
    OrderSide,
    OrderType,
    ProductType,
    Status,
)


async def collect(stream):
    batches = []
    async for batch in stream:
        batches.append(batch)
    return batches


# ---------------------------------------------------------------------------
# list_orders
# ---------------------------------------------------------------------------


class TestListOrders:
    """Tests for list_orders()"""

    @pytest.mark.asyncio
    async def test_all_filters_encoded(self):
        mock_request = AsyncMock(return_value={"orders": [], "has_next": False, "cursor": ""})

        await collect(
            list_orders(
                mock_request,
                product_id="BTC-USD",
                order_status=[Status.OPEN, Status.FILLED],
                limit=10,
                start_date=datetime(2023, 1, 1, tzinfo=timezone.utc),
                end_date=datetime(2023, 2, 1, 12, 30, tzinfo=timezone.utc),
                deprecated_user_native_currency="EUR",
                order_type=OrderType.LIMIT,
                order_side=OrderSide.BUY,
                cursor="abc",
                product_type=ProductType.SPOT,
                order_placement_source=OrderPlacementSource.RETAIL_ADVANCED,
                contract_expiry_type=ContractExpiryType.UNKNOWN_CONTRACT_EXPIRY_TYPE,
            )
        )

        args = mock_request.call_args
        assert args.args == ("GET", "/api/v3/brokerage/orders/historical/batch")
        assert args.kwargs["params"] == [
            ("product_id", "BTC-USD"),
            ("order_status", "OPEN"),
            ("order_status", "FILLED"),
            ("limit", "10"),
            ("start_date", "2023-01-01T00:00:00Z"),
            ("end_date", "2023-02-01T12:30:00Z"),
            ("deprecated_user_native_currency", "EUR"),
            ("order_type", "LIMIT"),
            ("order_side", "BUY"),
            ("cursor", "abc"),
            ("product_type", "SPOT"),
            ("order_placement_source", "RETAIL_ADVANCED"),
            ("contract_expiry_type", "UNKNOWN_CONTRACT_EXPIRY_TYPE"),
        ]

    @pytest.mark.asyncio
    async def test_paginates_while_has_next(self, order_payload):
        page1 = {"orders": [order_payload], "sequence": "0", "has_next": True, "cursor": "c2"}
        page2 = {"orders": [order_payload], "sequence": "0", "has_next": True, "cursor": "c3"}
        page3 = {"orders": [], "sequence": "0", "has_next": False, "cursor": ""}
        mock_request = AsyncMock(side_effect=[page1, page2, page3])

        batches = await collect(list_orders(mock_request, limit=1))

        assert [len(b) for b in batches] == [1, 1, 0]
        cursors = [dict(call.kwargs["params"]).get("cursor") for call in mock_request.call_args_list]
        assert cursors == [None, "c2", "c3"]

    @pytest.mark.asyncio
    async def test_has_next_with_empty_cursor_stops(self, order_payload):
        mock_request = AsyncMock(return_value={"orders": [order_payload], "has_next": True, "cursor": ""})

        batches = await collect(list_orders(mock_request))

        assert len(batches) == 1
        mock_request.assert_called_once()

    @pytest.mark.asyncio
    async def test_stops_early_when_consumer_breaks(self, order_payload):
        """Edge case: pages are fetched lazily."""
        mock_request = AsyncMock(return_value={"orders": [order_payload], "has_next": True, "cursor": "again"})

        async for batch in list_orders(mock_request):
            assert batch[0].order_id == "0000-000000-000000"
            break

        mock_request.assert_called_once()


# ---------------------------------------------------------------------------
# list_fills
# ---------------------------------------------------------------------------


class TestListFills:
    """Tests for list_fills()"""

    @pytest.mark.asyncio
    async def test_stops_on_empty_cursor(self, fill_payload):
        """Happy path: fills have no has_next, an empty cursor ends paging."""
        page1 = {"fills": [fill_payload], "cursor": "next"}
        page2 = {"fills": [fill_payload], "cursor": ""}
        mock_request = AsyncMock(side_effect=[page1, page2])

        batches = await collect(list_fills(mock_request, order_id="0000-000000-000000", limit=1))

        assert len(batches) == 2
        assert mock_request.call_args_list[1].kwargs["params"] == [
            ("order_id", "0000-000000-000000"),
            ("limit", "1"),
            ("cursor", "next"),
        ]

    @pytest.mark.asyncio
    async def test_missing_cursor_treated_as_last_page(self, fill_payload):
        mock_request = AsyncMock(return_value={"fills": [fill_payload]})

        batches = await collect(list_fills(mock_request))

        assert len(batches) == 1
        mock_request.assert_called_once_with("GET", "/api/v3/brokerage/orders/historical/fills", params=[])

    @pytest.mark.asyncio
    async def test_sequence_timestamps_encoded(self):
        mock_request = AsyncMock(return_value={"fills": [], "cursor": ""})

        await collect(
            list_fills(
                mock_request,
                product_id="BTC-USD",
                start_sequence_timestamp=datetime(2023, 1, 1, tzinfo=timezone.utc),
                end_sequence_timestamp=datetime(2023, 1, 2, tzinfo=timezone.utc),
            )
        )

        assert mock_request.call_args.kwargs["params"] == [
            ("product_id", "BTC-USD"),
            ("start_sequence_timestamp", "2023-01-01T00:00:00Z"),
            ("end_sequence_timestamp", "2023-01-02T00:00:00Z"),
        ]


# ---------------------------------------------------------------------------
# get_order
# ---------------------------------------------------------------------------


class TestGetOrder:
    """Tests for get_order()"""

    @pytest.mark.asyncio
    async def test_returns_order(self, order_payload):
        mock_request = AsyncMock(return_value={"order": order_payload})

        order = await get_order(mock_request, "0000-000000-000000")

        assert order.status == Status.OPEN
        mock_request.assert_called_once_with("GET", "/api/v3/brokerage/orders/historical/0000-000000-000000")

    @pytest.mark.asyncio
    async def test_not_found(self, cb_error_payload):
        mock_request = AsyncMock(return_value=cb_error_payload)

        with pytest.raises(CoinbaseApiError, match="NOT_FOUND"):
            await get_order(mock_request, "missing")


# ---------------------------------------------------------------------------
# create_order / cancel_order
# ---------------------------------------------------------------------------


class TestCreateOrder:
    """Tests for create_order()"""

    @pytest.mark.asyncio
    async def test_posts_order_payload(self):
        order = create_market_order("BTC-USD", OrderSide.BUY, 10.5)
        mock_request = AsyncMock(
            return_value={
                "success": True,
                "order_id": "new-order",
                "success_response": {
                    "order_id": "new-order",
                    "product_id": "BTC-USD",
                    "side": "BUY",
                    "client_order_id": order.client_order_id,
                },
            }
        )

        response = await create_order(mock_request, order)

        assert response.success is True
        assert response.order_id == "new-order"
        mock_request.assert_called_once_with(
            "POST",
            "/api/v3/brokerage/orders",
            data={
                "client_order_id": order.client_order_id,
                "product_id": "BTC-USD",
                "side": "BUY",
                "order_configuration": {"market_market_ioc": {"quote_size": "10.5"}},
            },
        )

    @pytest.mark.asyncio
    async def test_rejected_order_returned(self):
        """Edge case: success=false is a normal response, not an exception."""
        order = create_market_order("BTC-USD", OrderSide.SELL, 1)
        mock_request = AsyncMock(
            return_value={
                "success": False,
                "failure_reason": "INSUFFICIENT_FUND",
                "order_id": "",
                "error_response": {"error": "INSUFFICIENT_FUND", "message": "Insufficient balance"},
            }
        )

        response = await create_order(mock_request, order)

        assert response.success is False
        assert response.failure_reason == CreateOrderFailureReason.INSUFFICIENT_FUND


class TestCancelOrder:
    """Tests for cancel_order()"""

    @pytest.mark.asyncio
    async def test_returns_results(self):
        mock_request = AsyncMock(
            return_value={
                "results": [
                    {"success": True, "order_id": "a"},
                    {"success": False, "failure_reason": "UNKNOWN_CANCEL_ORDER", "order_id": "b"},
                ]
            }
        )

        results = await cancel_order(mock_request, ["a", "b"])

        assert [r.success for r in results] == [True, False]
        mock_request.assert_called_once_with(
            "POST", "/api/v3/brokerage/orders/batch_cancel", data={"order_ids": ["a", "b"]}
        )
