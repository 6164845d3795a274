"""
Storefront Backend: Shared Response Schemas
===========================================

What:  Error envelope, health payload and the base config every resource
       schema shares (camelCase on the wire, snake_case in Python).
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for request/response bodies.

    Clients send and receive camelCase keys (avatarUrl, shoppingCart);
    model_dump() without by_alias gives the snake_case attribute names the
    repositories expect.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise be coerced to 1/0
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


Integer = Annotated[int, BeforeValidator(_reject_bool)]
Number = Annotated[float, BeforeValidator(_reject_bool)]


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid rating: must be an integer between 1 and 5",
            "details": {"field": "rating"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
