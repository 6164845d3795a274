"""
User persistence: email is unique and stored lowercased, passwords are
stored as bcrypt hashes, and login credentials are checked here.
"""

import logging
from typing import Any, Dict, Mapping

from sqlalchemy import select

from storefront.exceptions import AuthenticationError, NotFoundError
from storefront.models.user import User
from storefront.repositories.base import Repository
from storefront.roles import USER
from storefront.security import hash_password, verify_password
from storefront.validation import USER_RULES

logger = logging.getLogger(__name__)


class UserRepository(Repository[User]):
    model = User
    resource = "user"
    rules = USER_RULES
    unique_fields = ("email",)
    filter_fields = ("name", "role")
    internal_fields = ("password",)

    def prepare(self, values: Dict[str, Any]) -> Dict[str, Any]:
        prepared = dict(values)
        if "name" in prepared:
            prepared["name"] = prepared["name"].strip()
        if "email" in prepared:
            prepared["email"] = prepared["email"].strip().lower()
        if "password" in prepared:
            prepared["password"] = hash_password(prepared["password"])
        return prepared

    async def create(self, values: Mapping[str, Any]) -> User:
        candidate = dict(values)
        if candidate.get("role") is None:
            candidate["role"] = USER
        return await super().create(candidate)

    async def get_by_email(self, email: str) -> User:
        stmt = select(User).where(User.email == email.strip().lower())
        async with self._store("get by email"):
            user = (await self.session.execute(stmt)).scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", context={"email": email})
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, AuthenticationError otherwise."""
        try:
            user = await self.get_by_email(email)
        except NotFoundError:
            user = None
        if user is None or not verify_password(password, user.password):
            logger.info("Failed login attempt")
            raise AuthenticationError(message="Incorrect email or password")
        return user
