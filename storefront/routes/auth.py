"""
Storefront Backend: Authentication Routes
=========================================

What:  Register and log in; both answer with the user and an access token.

Route Inventory:
    POST /v1/auth/register   201 {user, tokens}  (role is always "user")
    POST /v1/auth/login      200 {user, tokens}, 401 on bad credentials
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from storefront.config import settings
from storefront.dependencies import get_user_repository
from storefront.models.user import User
from storefront.repositories import UserRepository
from storefront.roles import USER
from storefront.schemas.common import ErrorResponse
from storefront.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from storefront.security import create_access_token
from storefront.transformers import transform_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["Auth"])


def _auth_payload(user: User) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "user": transform_user(user),
        "tokens": {
            "access": {
                "token": create_access_token(user.id, now=now),
                "expires": now + timedelta(minutes=settings.jwt_access_expiration_minutes),
            },
        },
    }


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={400: {"description": "Invalid input or email taken", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    user = await users.create({**body.model_dump(), "role": USER})
    return _auth_payload(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Incorrect email or password", "model": ErrorResponse}},
    summary="Log in with email and password",
)
async def login(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    user = await users.authenticate(body.email, body.password)
    logger.info("User %s logged in", user.id)
    return _auth_payload(user)
