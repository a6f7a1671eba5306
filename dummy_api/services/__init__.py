"""
Service layer: pagination, bulk operations, sample data and user handlers.
"""

from dummy_api.services.bulk import (
    BulkOperationError,
    BulkResult,
    delete_all,
    delete_records,
)
from dummy_api.services.pagination import fetch_all
from dummy_api.services.sample_data import SampleUserGenerator
from dummy_api.services.user_service import UserService

__all__ = [
    "fetch_all",
    "delete_all",
    "delete_records",
    "BulkResult",
    "BulkOperationError",
    "SampleUserGenerator",
    "UserService",
]
