"""
User and authentication schemas. Passwords only ever travel inward.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.schemas.common import ApiModel


class UserCreate(ApiModel):
    name: str
    email: str
    password: str = Field(description="At least 8 characters with a letter and a number")
    role: Optional[str] = Field(default=None, description="user (default) or admin")


class UserUpdate(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    role: str


class RegisterRequest(ApiModel):
    name: str
    email: str
    password: str


class LoginRequest(ApiModel):
    email: str
    password: str


class AccessToken(ApiModel):
    token: str
    expires: datetime


class AuthTokens(ApiModel):
    access: AccessToken


class AuthResponse(ApiModel):
    user: UserResponse
    tokens: AuthTokens
