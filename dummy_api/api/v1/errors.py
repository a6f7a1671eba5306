"""
Translation of store and bulk failures into HTTP errors.

Every failure leaves the API as an HTTPException whose detail is an
ErrorResponse payload.
"""

import logging

from fastapi import HTTPException, status

from dummy_api.models.results import ErrorResponse
from dummy_api.providers.store.base import (
    RecordNotFoundError,
    RecordStoreError,
    StoreUnavailableError,
)
from dummy_api.services.bulk import BulkOperationError

logger = logging.getLogger(__name__)


def error_detail(error: str, message: str, details: list | None = None) -> dict:
    """Build the ErrorResponse payload used as HTTPException detail."""
    return ErrorResponse(error=error, message=message, details=details).model_dump()


def key_conflict(exc: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=error_detail("key_conflict", str(exc)),
    )


def not_found(exc: RecordNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_detail("not_found", str(exc)),
    )


def store_failure(exc: RecordStoreError) -> HTTPException:
    """Map a store failure to 502, distinguishing transport errors."""
    logger.error(f"Record store failure: {exc}")
    category = (
        "store_unavailable"
        if isinstance(exc, StoreUnavailableError)
        else "store_error"
    )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error_detail(category, str(exc)),
    )


def bulk_failure(exc: BulkOperationError) -> HTTPException:
    """Map a partially failed bulk operation to 502 with per-item outcomes."""
    logger.error(f"Bulk operation failed: {exc}")
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error_detail(
            "bulk_partial_failure",
            str(exc),
            details=[o.model_dump() for o in exc.result.failed],
        ),
    )


# OpenAPI documentation for the error responses
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Record not found"}}
CONFLICT_RESPONSE = {
    409: {"model": ErrorResponse, "description": "Request conflicts with the record key"}
}
STORE_ERROR_RESPONSE = {
    502: {"model": ErrorResponse, "description": "Record store failure"}
}
