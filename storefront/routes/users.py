"""
Storefront Backend: User Route Handlers
=======================================

Route Inventory:
    POST   /v1/users             manageUsers          201
    GET    /v1/users             getUsers             200 (name, role, sortBy, limit, page)
    GET    /v1/users/{id}        getUsers or self     200
    PATCH  /v1/users/{id}        manageUsers or self  200
    DELETE /v1/users/{id}        manageUsers or self  204

Password hashes never leave the repository; responses carry id, name,
email and role.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from storefront.auth import require_permission
from storefront.dependencies import get_user_repository
from storefront.models.user import User
from storefront.query_options import LIMIT_PARAM, PAGE_PARAM, SORT_PARAM, build_query_options
from storefront.repositories import UserRepository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.user import UserCreate, UserResponse, UserUpdate
from storefront.transformers import transform_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/users", tags=["Users"])

_ERRORS = {
    400: {"description": "Invalid input, email taken or malformed id", "model": ErrorResponse},
    401: {"description": "Missing or invalid access token", "model": ErrorResponse},
    403: {"description": "Insufficient rights", "model": ErrorResponse},
}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.post("", status_code=201, response_model=UserResponse, responses=_ERRORS, summary="Create a user")
async def create_user(
    body: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    _: User = Depends(require_permission("manageUsers")),
) -> Dict[str, Any]:
    user = await users.create(body.model_dump(exclude_unset=True))
    return transform_user(user)


@router.get("", response_model=List[UserResponse], responses=_ERRORS, summary="List users")
async def list_users(
    name: Optional[str] = Query(default=None),
    role: Optional[str] = Query(default=None),
    sort_by: Optional[str] = Query(default=None, alias=SORT_PARAM, description="field:asc or field:desc"),
    limit: Optional[str] = Query(default=None, description="Page size"),
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    users: UserRepository = Depends(get_user_repository),
    _: User = Depends(require_permission("getUsers")),
) -> List[Dict[str, Any]]:
    options = build_query_options(
        {"name": name, "role": role, SORT_PARAM: sort_by, LIMIT_PARAM: limit, PAGE_PARAM: page},
        allowed_filters=users.filter_fields,
    )
    return [transform_user(user) for user in await users.list(options)]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Get a user",
)
async def get_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
    _: User = Depends(require_permission("getUsers", owner_param="user_id")),
) -> Dict[str, Any]:
    return transform_user(await users.get(user_id))


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Update a user",
)
async def update_user(
    user_id: str,
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    _: User = Depends(require_permission("manageUsers", owner_param="user_id")),
) -> Dict[str, Any]:
    user = await users.update(user_id, body.model_dump(exclude_unset=True, exclude_none=True))
    return transform_user(user)


@router.delete(
    "/{user_id}",
    status_code=204,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
    _: User = Depends(require_permission("manageUsers", owner_param="user_id")),
) -> Response:
    await users.remove(user_id)
    return Response(status_code=204)
