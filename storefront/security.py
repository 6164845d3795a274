"""
Storefront Backend: Password Hashing and Access Tokens
======================================================

What:  bcrypt password hashes and HS256 JWT access tokens.
Who:   UserRepository (hashing), auth routes (issuing), auth guard (verifying).

Token claims:
    sub   user id (UUID string)
    type  "access"
    iat   issued-at (UTC)
    exp   expiry, JWT_ACCESS_EXPIRATION_MINUTES after iat
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from storefront.config import settings
from storefront.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.password_hash_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: uuid.UUID, now: Optional[datetime] = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_access_expiration_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify signature, expiry and token type; return the subject's user id.

    Raises:
        AuthenticationError: for any token that cannot be trusted.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(message="Access token has expired")
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected access token: %s", e)
        raise AuthenticationError()

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise AuthenticationError()
    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise AuthenticationError()
