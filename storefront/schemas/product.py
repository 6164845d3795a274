"""
Product request/response schemas.

Request schemas only check JSON types; range and format rules live in
storefront.validation and run inside the repository.
"""

from typing import Optional

from pydantic import Field

from storefront.schemas.common import ApiModel, Integer, Number


class ProductCreate(ApiModel):
    name: str = Field(description="Display name; at least 2 chars, not all lowercase, unique")
    avatar_url: str = Field(description="Product image URL")
    rating: Integer = Field(description="Integer from 1 to 5")
    quantity: Integer = Field(description="Integer from 1 to 1000")
    price: Number = Field(description="From 0.01 to 1000.00")
    disabled: bool = Field(default=False)


class ProductUpdate(ApiModel):
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    rating: Optional[Integer] = None
    quantity: Optional[Integer] = None
    price: Optional[Number] = None
    disabled: Optional[bool] = None


class ProductResponse(ApiModel):
    id: str
    name: str
    avatar_url: str
    price: float
    rating: int
    quantity: int
    disabled: bool
