"""
app/schemas/dispatch.py

Purpose: Dispatch request and result schemas

- Wire model for the send-message form payload
- DispatchResult: explicit success/failure outcome with an error category
- Maps each outcome to its HTTP status code
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DispatchRequest(BaseModel):
    """
    Lead form payload.
    All fields are optional on the wire; absence is treated as empty.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fullName": "Alex Johnson",
                "phoneNumber": "+15551234567",
                "message": "Hi {{ name }}, welcome!"
            }
        }
    )

    full_name: Optional[str] = Field(default=None, alias="fullName")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    message_template: Optional[str] = Field(default=None, alias="message")


class FailureCategory(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class DispatchResult(BaseModel):
    """
    Outcome of a single dispatch.

    Success carries no payload. Failure carries a caller-facing reason
    and the category that decides the HTTP status.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    reason: Optional[str] = None
    category: Optional[FailureCategory] = None

    @model_validator(mode="after")
    def check_outcome(self):
        if self.ok and (self.reason is not None or self.category is not None):
            raise ValueError("a successful result carries no reason or category")
        if not self.ok and (self.reason is None or self.category is None):
            raise ValueError("a failed result needs both reason and category")
        return self

    @classmethod
    def success(cls) -> "DispatchResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, category: FailureCategory, reason: str) -> "DispatchResult":
        return cls(ok=False, category=category, reason=reason)

    @property
    def status_code(self) -> int:
        if self.ok:
            return 200
        if self.category == FailureCategory.VALIDATION_ERROR:
            return 400
        return 500
