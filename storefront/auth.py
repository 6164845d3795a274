"""
Storefront Backend: Route Guard
===============================

What:  Bearer-token authentication and per-route permission checks.
How:   ``require_permission("manageProducts")`` returns a FastAPI dependency
       that runs before the handler:

       1. No/invalid bearer token            → AuthenticationError (401)
       2. Token subject is not a stored user → AuthenticationError (401)
       3. Role lacks a required right        → AuthorizationError (403)
          unless the route names an ``owner_param`` whose path value is the
          caller's own id (users may read/update/delete themselves).

Usage:
    @router.patch("/{user_id}")
    async def update_user(
        user_id: str,
        current_user: User = Depends(require_permission("manageUsers", owner_param="user_id")),
    ): ...
"""

import logging
import uuid
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.dependencies import get_user_repository
from storefront.exceptions import AuthenticationError, AuthorizationError
from storefront.models.user import User
from storefront.repositories import UserRepository
from storefront.roles import rights_for
from storefront.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: missing credentials become our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def _is_owner(value: Optional[str], user: User) -> bool:
    try:
        return uuid.UUID(str(value)) == user.id
    except ValueError:
        return False


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None:
        raise AuthenticationError()
    user_id = decode_access_token(credentials.credentials)
    user = await users.find(user_id)
    if user is None:
        raise AuthenticationError()
    return user


def require_permission(*required_rights: str, owner_param: Optional[str] = None) -> Callable:
    async def guard(request: Request, user: User = Depends(get_current_user)) -> User:
        rights = rights_for(user.role)
        if all(right in rights for right in required_rights):
            return user
        if owner_param is not None and _is_owner(request.path_params.get(owner_param), user):
            return user
        logger.info(
            "User %s (role=%s) denied %s %s",
            user.id, user.role, request.method, request.url.path,
        )
        raise AuthorizationError()

    return guard
