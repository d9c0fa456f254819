from pydantic import BaseModel
from typing import Optional, Any, Literal


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class SendErrorResponse(BaseModel):
    """
    Error body returned by the send endpoint.
    """
    error: str


class SendOkResponse(BaseModel):
    ok: Literal[True] = True
