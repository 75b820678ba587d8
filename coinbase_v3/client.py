"""
Coinbase Advanced Trade API Client

Authenticates every request with a bearer token from an AccessTokenProvider:
- OAuthCbClient (OAuth2, see coinbase_v3.oauth)
- CdpKeyTokenProvider (CDP API key JWT)
- StaticTokenProvider (token obtained elsewhere)

Endpoint logic lives in coinbase_v3.api; this class owns the HTTP session,
retries and error mapping.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional
from uuid import UUID

import httpx
from pydantic import ValidationError

from coinbase_v3.api import account_api, fee_api, order_api, product_api
from coinbase_v3.auth import AccessTokenProvider, CdpKeyTokenProvider
from coinbase_v3.constants import BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT
from coinbase_v3.exceptions import (
    CoinbaseApiError,
    ConfigurationError,
    DeserializationError,
    HttpError,
    HttpStatusError,
    RateLimitError,
)
from coinbase_v3.schemas.accounts import Account
from coinbase_v3.schemas.errors import CbRequestError
from coinbase_v3.schemas.fees import TransactionsSummary
from coinbase_v3.schemas.orders import (
    CancelOrderResponse,
    CreateOrderResponse,
    Fill,
    Order,
    OrderPlacementSource,
    OrderSide,
    OrderToSend,
    OrderType,
    Status,
)
from coinbase_v3.schemas.products import (
    Candle,
    ContractExpiryType,
    Granularity,
    MarketTrades,
    Pricebook,
    Product,
    ProductType,
)

logger = logging.getLogger(__name__)


def _error_payload(body: Any) -> Optional[CbRequestError]:
    if not isinstance(body, dict) or "error" not in body:
        return None
    try:
        return CbRequestError.model_validate(body)
    except ValidationError:
        return None


def _parse_error_body(response: httpx.Response) -> Optional[CbRequestError]:
    try:
        return _error_payload(response.json())
    except ValueError:
        return None


class CbClient:
    """
    Coinbase Advanced Trade API Client

    Usage:
        async with CbClient(token_provider) as client:
            product = await client.get_product("BTC-USD")
            async for accounts in client.list_accounts(limit=50):
                ...
    """

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """
        Args:
            token_provider: Source of bearer tokens; responsible for their validity
            http_client: Optional shared httpx client (not closed by aclose())
            base_url: API root, overridable for tests
            timeout: Request timeout in seconds (own http client only)
            max_retries: Attempts per request when rate limited (429)
        """
        self.token_provider = token_provider
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, token_provider: Optional[AccessTokenProvider] = None, settings=None) -> "CbClient":
        """
        Build a client from Settings.

        Without an explicit provider, a CDP key from the settings is used.
        """
        if settings is None:
            from coinbase_v3.config import settings

        if token_provider is None:
            if settings.coinbase_cdp_key_name and settings.coinbase_cdp_private_key:
                token_provider = CdpKeyTokenProvider(settings.coinbase_cdp_key_name, settings.coinbase_cdp_private_key)
            elif settings.coinbase_cdp_key_file:
                token_provider = CdpKeyTokenProvider.from_file(settings.coinbase_cdp_key_file)
            else:
                raise ConfigurationError("No token provider given and no CDP key configured")

        return cls(
            token_provider,
            base_url=settings.coinbase_api_base_url,
            timeout=settings.coinbase_request_timeout,
            max_retries=settings.coinbase_max_retries,
        )

    async def __aenter__(self) -> "CbClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        if self._owns_http:
            await self._http.aclose()

    # ===== Request Method =====

    async def _send(
        self, method: str, endpoint: str, params: Optional[Any], data: Optional[Dict[str, Any]]
    ) -> httpx.Response:
        token = await self.token_provider.access_token(method, endpoint)
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        url = f"{self.base_url}{endpoint}"

        try:
            return await self._http.request(
                method, url, headers=headers, params=params, json=data if method == "POST" else None
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {endpoint} failed: {e}")
            raise HttpError(f"{method} {endpoint} failed: {e}") from e

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make authenticated request to Coinbase API

        Retries 429 with exponential backoff (1s, 2s, 4s...) and, once, a 401
        after asking the token provider for a fresh token.

        Returns:
            Decoded JSON body
        """
        refreshed = False
        attempt = 0
        while True:
            logger.debug(f"{method} {endpoint} params={params}")
            response = await self._send(method, endpoint, params, data)

            if response.status_code == 429 and attempt < self.max_retries - 1:
                wait_time = 2**attempt
                logger.warning(
                    f"⚠️  Rate limited (429) on {method} {endpoint}, "
                    f"retrying in {wait_time}s... (attempt {attempt + 1}/{self.max_retries})"
                )
                attempt += 1
                await asyncio.sleep(wait_time)
                continue

            if response.status_code == 401 and not refreshed:
                refreshed = True
                if await self.token_provider.force_refresh():
                    logger.info(f"Got 401 on {method} {endpoint}, retrying with a refreshed token")
                    continue

            break

        if response.is_success:
            try:
                body = response.json()
            except ValueError as e:
                raise DeserializationError(f"{method} {endpoint} returned invalid JSON: {e}") from e

            # Coinbase sometimes reports errors with a 2xx status
            error = _error_payload(body)
            if error is not None:
                logger.error(f"❌ Coinbase API error in {response.status_code} response on {method} {endpoint}: {error}")
                raise CoinbaseApiError(error, status_code=response.status_code)
            return body

        error = _parse_error_body(response)
        if response.status_code == 429:
            logger.error(f"❌ Rate limit exceeded after {self.max_retries} attempts on {method} {endpoint}")
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                error or CbRequestError(error="rate_limit_exceeded", message=response.text),
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        logger.error(f"❌ Coinbase API error {response.status_code} on {method} {endpoint}: {response.text}")
        if error is not None:
            raise CoinbaseApiError(error, status_code=response.status_code)
        raise HttpStatusError(
            f"{method} {endpoint} returned HTTP {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    # ===== Accounts =====

    def list_accounts(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> AsyncIterator[List[Account]]:
        return account_api.list_accounts(self._request, limit=limit, cursor=cursor)

    async def get_account(self, account_uuid: UUID) -> Account:
        return await account_api.get_account(self._request, account_uuid)

    # ===== Products =====

    async def get_best_bid_ask(self, product_ids: Optional[List[str]] = None) -> List[Pricebook]:
        return await product_api.get_best_bid_ask(self._request, product_ids)

    async def get_product_book(self, product_id: str, limit: Optional[int] = None) -> Pricebook:
        return await product_api.get_product_book(self._request, product_id, limit)

    async def list_products(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        product_type: Optional[ProductType] = None,
        product_ids: Optional[List[str]] = None,
        contract_expiry_type: Optional[ContractExpiryType] = None,
    ) -> List[Product]:
        return await product_api.list_products(
            self._request,
            limit=limit,
            offset=offset,
            product_type=product_type,
            product_ids=product_ids,
            contract_expiry_type=contract_expiry_type,
        )

    async def get_product(self, product_id: str) -> Product:
        return await product_api.get_product(self._request, product_id)

    async def get_product_candles(
        self, product_id: str, start: datetime, end: datetime, granularity: Granularity
    ) -> List[Candle]:
        return await product_api.get_product_candles(self._request, product_id, start, end, granularity)

    async def get_market_trades(self, product_id: str, limit: int) -> MarketTrades:
        return await product_api.get_market_trades(self._request, product_id, limit)

    # ===== Orders =====

    def list_orders(
        self,
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
        return order_api.list_orders(
            self._request,
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

    def list_fills(
        self,
        order_id: Optional[str] = None,
        product_id: Optional[str] = None,
        start_sequence_timestamp: Optional[datetime] = None,
        end_sequence_timestamp: Optional[datetime] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> AsyncIterator[List[Fill]]:
        return order_api.list_fills(
            self._request,
            order_id=order_id,
            product_id=product_id,
            start_sequence_timestamp=start_sequence_timestamp,
            end_sequence_timestamp=end_sequence_timestamp,
            limit=limit,
            cursor=cursor,
        )

    async def get_order(self, order_id: str) -> Order:
        return await order_api.get_order(self._request, order_id)

    async def create_order(self, order: OrderToSend) -> CreateOrderResponse:
        """Warning: placing orders trades real funds."""
        return await order_api.create_order(self._request, order)

    async def cancel_order(self, order_ids: List[str]) -> List[CancelOrderResponse]:
        return await order_api.cancel_order(self._request, order_ids)

    # ===== Fees =====

    async def get_transactions_summary(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        user_native_currency: Optional[str] = None,
        product_type: Optional[ProductType] = None,
        contract_expiry_type: Optional[ContractExpiryType] = None,
    ) -> TransactionsSummary:
        return await fee_api.get_transactions_summary(
            self._request,
            start_date=start_date,
            end_date=end_date,
            user_native_currency=user_native_currency,
            product_type=product_type,
            contract_expiry_type=contract_expiry_type,
        )
