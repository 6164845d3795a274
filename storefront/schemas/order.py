"""
Order request/response schemas.

``shoppingCart.items[].product`` is a product id; the rule table checks its
format, nothing checks that the product exists.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from storefront.schemas.common import ApiModel, Number


class CartItem(ApiModel):
    product: Optional[str] = Field(default=None, description="Product id (weak reference)")
    promo_price: Optional[Number] = None
    discount_percent: Optional[Number] = None
    quantity: Optional[Number] = None


class ShoppingCart(ApiModel):
    total: Number
    items: List[CartItem] = Field(default_factory=list)


class OrderCreate(ApiModel):
    name: str
    shopping_cart: ShoppingCart
    disabled: bool = False
    obs: Optional[str] = None


class OrderUpdate(ApiModel):
    name: Optional[str] = None
    shopping_cart: Optional[ShoppingCart] = None
    disabled: Optional[bool] = None
    obs: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Supplied fields. An explicit null clears ``obs`` and is ignored elsewhere."""
        values = self.model_dump(exclude_unset=True)
        return {key: value for key, value in values.items() if value is not None or key == "obs"}


class OrderResponse(ApiModel):
    id: str
    name: str
    price: Optional[float] = Field(default=None, description="Cart total")
    disabled: bool
