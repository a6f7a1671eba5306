"""
Result and error models shared by all endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ItemOutcome(BaseModel):
    """
    Outcome of one sub-operation of a bulk operation.

    Attributes:
        key: Record key the sub-operation acted on.
        success: Whether it completed.
        reason: Failure message when it did not.
    """

    key: str = Field(..., description="Record key")
    success: bool = Field(..., description="Whether the sub-operation completed")
    reason: Optional[str] = Field(default=None, description="Failure reason")


class ErrorResponse(BaseModel):
    """
    Error payload returned by every failing handler.

    Attributes:
        error: Machine-readable error category (e.g. "not_found").
        message: Human-readable description.
        details: Optional per-item information (bulk failures).
    """

    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human-readable message")
    details: Optional[list[Any]] = Field(
        default=None, description="Per-item details, if any"
    )
