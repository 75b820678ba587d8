"""
Fee operations for Coinbase API
"""

from datetime import datetime
from typing import Callable, Optional

from coinbase_v3.constants import API_PREFIX
from coinbase_v3.schemas.fees import TransactionsSummary
from coinbase_v3.schemas.products import ContractExpiryType, ProductType
from coinbase_v3.utils import parse_response, query_params


async def get_transactions_summary(
    request_func: Callable,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    user_native_currency: Optional[str] = None,
    product_type: Optional[ProductType] = None,
    contract_expiry_type: Optional[ContractExpiryType] = None,
) -> TransactionsSummary:
    """
    Get a summary of transactions with fee tiers, total volume, and fees

    https://docs.cloud.coinbase.com/advanced-trade-api/reference/retailbrokerageapi_gettransactionsummary
    """
    params = query_params(
        start_date=start_date,
        end_date=end_date,
        user_native_currency=user_native_currency,
        product_type=product_type,
        contract_expiry_type=contract_expiry_type,
    )
    result = await request_func("GET", f"{API_PREFIX}/transaction_summary", params=params)
    return parse_response(TransactionsSummary, result)
