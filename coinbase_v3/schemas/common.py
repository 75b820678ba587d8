"""
Field types shared by the Coinbase schemas.

Coinbase timestamps are RFC 3339 with up to nanosecond precision, and some
numeric fields come back as "" when no data is available.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BeforeValidator, PlainSerializer

# "2023-08-17T04:59:45.166512756Z" -> group(1) is ".166512", group(2) is "756"
_FRACTION_RE = re.compile(r"(\.\d{6})(\d+)")


def _trim_fraction(value: Any) -> Any:
    """Drop sub-microsecond digits, which datetime cannot hold."""
    if isinstance(value, str):
        return _FRACTION_RE.sub(r"\1", value, count=1)
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _stable_decimal(value: Any) -> Optional[Decimal]:
    """Map "", null and unparsable strings to None."""
    if value is None or isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return parsed


UtcDateTime = Annotated[datetime, BeforeValidator(_trim_fraction), AfterValidator(_as_utc)]

StableDecimal = Annotated[Optional[Decimal], BeforeValidator(_stable_decimal)]


def format_datetime(value: datetime) -> str:
    """RFC 3339, second precision, 'Z' suffix (e.g. 2021-05-31T09:59:59Z)."""
    return _as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def _plain_decimal(value: Decimal) -> str:
    # "0.0000001", never "1E-7"
    return format(value, "f")


# Decimal sent to Coinbase in request bodies
ApiDecimal = Annotated[Decimal, PlainSerializer(_plain_decimal, return_type=str, when_used="json")]


def to_unix_seconds(value: datetime) -> int:
    """Naive datetimes are taken as UTC."""
    return int(_as_utc(value).timestamp())
