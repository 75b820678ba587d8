"""
Account operations for Coinbase API
Handles account listing (paginated) and single account lookup
"""

import logging
from typing import AsyncIterator, Callable, List, Optional
from uuid import UUID

from coinbase_v3.constants import API_PREFIX
from coinbase_v3.schemas.accounts import Account, AccountResponse, AccountsResponse
from coinbase_v3.utils import parse_response, query_params

logger = logging.getLogger(__name__)


async def list_accounts(
    request_func: Callable, limit: Optional[int] = None, cursor: Optional[str] = None
) -> AsyncIterator[List[Account]]:
    """
    List all accounts as a stream of batches

    Yields `limit` accounts per batch, starting from `cursor` (normally None),
    and keeps following the returned cursor while Coinbase reports has_next
    and the cursor is not empty.

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getaccounts
    """
    page_count = 0
    while True:
        result = await request_func(
            "GET", f"{API_PREFIX}/accounts", params=query_params(limit=limit, cursor=cursor)
        )
        response = parse_response(AccountsResponse, result)
        page_count += 1
        logger.debug(f"Fetched accounts page {page_count}: {len(response.accounts)} accounts")

        yield response.accounts

        if not response.has_next or not response.cursor:
            break
        cursor = response.cursor


async def get_account(request_func: Callable, account_uuid: UUID) -> Account:
    """
    Get a single account by id

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_getaccount
    """
    result = await request_func("GET", f"{API_PREFIX}/accounts/{account_uuid}")
    return parse_response(AccountResponse, result).account
