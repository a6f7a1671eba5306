"""
Admin endpoints: seed and dump the whole database.
"""

from fastapi import APIRouter, Depends

from dummy_api.api.v1.errors import STORE_ERROR_RESPONSE, bulk_failure, store_failure
from dummy_api.core.container import get_user_service_dep
from dummy_api.models.user import User
from dummy_api.providers.store.base import RecordStoreError
from dummy_api.services.bulk import BulkOperationError
from dummy_api.services.user_service import UserService

router = APIRouter(prefix="/db", tags=["admin"])


@router.put(
    "/feed",
    response_model=list[User],
    response_model_exclude_none=True,
    summary="feed database",
    description="feeds the database with 25 sample data entries",
    responses={**STORE_ERROR_RESPONSE},
)
async def feed_database(service: UserService = Depends(get_user_service_dep)):
    """Generate sample users, bulk-put them and return those the store accepted."""
    try:
        result = await service.feed()
    except RecordStoreError as e:
        raise store_failure(e)
    return result.succeeded_records


@router.delete(
    "/dump",
    response_model=list[User],
    response_model_exclude_none=True,
    summary="dump database",
    description="dumps the whole database, clears all data",
    responses={**STORE_ERROR_RESPONSE},
)
async def dump_database(service: UserService = Depends(get_user_service_dep)):
    """
    Delete every user and return the pre-dump snapshot.

    If any delete fails the response is 502 listing the failed keys;
    the deletes that went through stay applied.
    """
    try:
        result = await service.dump()
    except BulkOperationError as e:
        raise bulk_failure(e)
    except RecordStoreError as e:
        raise store_failure(e)
    return result.records
