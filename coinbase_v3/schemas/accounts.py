"""Account-related Pydantic schemas"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from coinbase_v3.schemas.common import UtcDateTime


class AccountType(str, Enum):
    ACCOUNT_TYPE_UNSPECIFIED = "ACCOUNT_TYPE_UNSPECIFIED"
    ACCOUNT_TYPE_CRYPTO = "ACCOUNT_TYPE_CRYPTO"
    ACCOUNT_TYPE_FIAT = "ACCOUNT_TYPE_FIAT"
    ACCOUNT_TYPE_VAULT = "ACCOUNT_TYPE_VAULT"


class Balance(BaseModel):
    # Decimal, not float: the number of decimals is currency dependent
    value: Decimal
    currency: str


class Account(BaseModel):
    uuid: UUID
    name: str
    currency: str
    available_balance: Balance
    default: bool
    active: bool
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None
    deleted_at: Optional[UtcDateTime] = None
    type: AccountType
    ready: bool
    hold: Balance


class AccountsResponse(BaseModel):
    """
    Wrapped response for a list of accounts.

    Client calls unpack `accounts`; `has_next` and `cursor` drive pagination.
    """

    accounts: List[Account]
    has_next: bool
    cursor: str = ""
    size: int = 0


class AccountResponse(BaseModel):
    account: Account
