"""
Storefront Backend: Order SQLAlchemy Model
==========================================

What:  ORM model for the `orders` table.

The shopping cart is stored as one JSON document:

    {
        "total": 59.9,
        "items": [
            {"product": "<product uuid>", "promo_price": 19.9,
             "discount_percent": 10, "quantity": 3}
        ]
    }

``items[].product`` is a weak reference: a product id kept as a string.
Deleting the product leaves the order untouched; OrderRepository resolves the
references on demand.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base
from storefront.models.common import EntityMixin


class Order(EntityMixin, Base):
    __tablename__ = "orders"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    shopping_cart: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    disabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    obs: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def price(self) -> Optional[float]:
        """The order's price is its cart total."""
        total = (self.shopping_cart or {}).get("total")
        return float(total) if total is not None else None

    @property
    def items(self) -> List[Dict[str, Any]]:
        return list((self.shopping_cart or {}).get("items") or [])

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, name='{self.name}', price={self.price})>"
