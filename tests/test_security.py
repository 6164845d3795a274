"""
Storefront Backend: Password Hashing and Access Token Tests
===========================================================
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from storefront.config import settings
from storefront.exceptions import AuthenticationError
from storefront.security import create_access_token, decode_access_token, hash_password, verify_password


class TestPasswords:

    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("password1")
        assert hashed != "password1"
        assert verify_password("password1", hashed)

    def test_wrong_password_fails(self):
        assert not verify_password("password2", hash_password("password1"))

    def test_non_bcrypt_value_fails(self):
        assert not verify_password("password1", "password1")


class TestAccessTokens:

    def test_round_trip_returns_subject(self):
        user_id = uuid.uuid4()
        assert decode_access_token(create_access_token(user_id)) == user_id

    def test_expired_token_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(minutes=settings.jwt_access_expiration_minutes + 5)
        token = create_access_token(uuid.uuid4(), now=issued)

        with pytest.raises(AuthenticationError) as exc_info:
            decode_access_token(token)

        assert "expired" in exc_info.value.message

    def test_wrong_signature_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "access", "exp": now + timedelta(minutes=5)},
            "another-secret-that-is-long-enough-32b",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_wrong_token_type_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "refresh", "exp": now + timedelta(minutes=5)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            decode_access_token("not-a-token")
