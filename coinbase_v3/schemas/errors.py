"""Coinbase error payloads"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel


class CbRequestErrorDetails(BaseModel):
    type_url: str = ""
    value: Any = None


class CbRequestError(BaseModel):
    """
    Error body returned by Coinbase, e.g.

    {"error": "NOT_FOUND", "code": 5, "message": "order not found", "details": [...]}
    """

    error: str
    code: Optional[int] = None
    message: str = ""
    details: Union[CbRequestErrorDetails, List[CbRequestErrorDetails], None] = None

    def __str__(self) -> str:
        return f"{self.error} (code={self.code}): {self.message}"
