"""
User CRUD endpoints.

Each handler delegates to the UserService bound to the injected record store.
"""

import logging

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse

from dummy_api.api.v1.errors import (
    CONFLICT_RESPONSE,
    NOT_FOUND_RESPONSE,
    STORE_ERROR_RESPONSE,
    key_conflict,
    not_found,
    store_failure,
)
from dummy_api.core.container import get_user_service_dep
from dummy_api.models.user import User, UserPatch
from dummy_api.providers.store.base import RecordNotFoundError, RecordStoreError
from dummy_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "",
    response_model=list[User],
    response_model_exclude_none=True,
    summary="get all users",
    description="gets all users",
    responses={**STORE_ERROR_RESPONSE},
)
async def list_users(service: UserService = Depends(get_user_service_dep)):
    """Walk every page of the store and return all users."""
    try:
        return await service.list_users()
    except RecordStoreError as e:
        raise store_failure(e)


@router.get(
    "/{email}",
    response_model=User,
    response_model_exclude_none=True,
    summary="get a user",
    description="gets a user",
    responses={**NOT_FOUND_RESPONSE, **STORE_ERROR_RESPONSE},
)
async def get_user(
    email: str = Path(..., description="user email"),
    service: UserService = Depends(get_user_service_dep),
):
    try:
        return await service.get_user(email)
    except RecordNotFoundError as e:
        raise not_found(e)
    except RecordStoreError as e:
        raise store_failure(e)


@router.put(
    "",
    response_model=User,
    response_model_exclude_none=True,
    summary="create a user",
    description="creates a new user",
    responses={**STORE_ERROR_RESPONSE},
)
async def put_user(
    user: User,
    service: UserService = Depends(get_user_service_dep),
):
    """Store the user under its email; an existing user is overwritten."""
    try:
        return await service.put_user(user.model_dump(exclude_none=True))
    except RecordStoreError as e:
        raise store_failure(e)


@router.patch(
    "/{email}",
    response_model=UserPatch,
    response_model_exclude_unset=True,
    summary="edit user",
    description="change user data",
    responses={
        **NOT_FOUND_RESPONSE,
        **CONFLICT_RESPONSE,
        **STORE_ERROR_RESPONSE,
    },
)
async def update_user(
    patch: UserPatch,
    email: str = Path(..., description="user email"),
    service: UserService = Depends(get_user_service_dep),
):
    """Merge the submitted fields into the user and echo them back."""
    try:
        return await service.update_user(email, patch.model_dump(exclude_unset=True))
    except ValueError as e:
        raise key_conflict(e)
    except RecordNotFoundError as e:
        raise not_found(e)
    except RecordStoreError as e:
        raise store_failure(e)


@router.delete(
    "/{email:path}",
    response_class=PlainTextResponse,
    summary="delete a user",
    description="delete user",
    responses={**STORE_ERROR_RESPONSE},
)
async def delete_user(
    email: str = Path(..., description="user email"),
    service: UserService = Depends(get_user_service_dep),
) -> str:
    """Answer "Failure" for a blank email, "Success" once deleted."""
    try:
        deleted = await service.delete_user(email)
    except RecordStoreError as e:
        raise store_failure(e)
    if not deleted:
        logger.info("Delete skipped: blank email")
        return "Failure"
    return "Success"
