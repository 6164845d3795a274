"""
Order persistence.

The cart is a JSON document; its product references are weak. They are
validated for shape on write and resolved with a lookup on demand.
"""

import uuid
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import select

from storefront.models.order import Order
from storefront.models.product import Product
from storefront.repositories.base import Repository
from storefront.validation import ORDER_RULES

_CART_NUMBERS = ("promo_price", "discount_percent", "quantity")


def _number(value: Any) -> Any:
    if value is None:
        return None
    number = Decimal(str(value))
    return int(number) if number == number.to_integral_value() else float(number)


class OrderRepository(Repository[Order]):
    model = Order
    resource = "order"
    rules = ORDER_RULES
    filter_fields = ("name", "disabled")

    def prepare(self, values: Dict[str, Any]) -> Dict[str, Any]:
        prepared = dict(values)
        if "name" in prepared:
            prepared["name"] = prepared["name"].strip()
        if "shopping_cart" in prepared:
            cart = prepared["shopping_cart"]
            items = []
            for item in cart.get("items") or []:
                stored = {key: _number(item.get(key)) for key in _CART_NUMBERS}
                product = item.get("product")
                stored["product"] = str(product) if product is not None else None
                items.append(stored)
            prepared["shopping_cart"] = {"total": _number(cart["total"]), "items": items}
        return prepared

    async def cart_products(self, order: Order) -> List[Product]:
        """
        Resolve the products referenced by the order's cart, in item order.

        References to products that no longer exist are skipped. This is a
        lookup helper for callers holding an order; no route exposes it.
        """
        ids = []
        for item in order.items:
            product = item.get("product")
            if product:
                ids.append(uuid.UUID(str(product)))
        if not ids:
            return []

        async with self._store("cart lookup"):
            result = await self.session.execute(select(Product).where(Product.id.in_(set(ids))))
            found = {product.id: product for product in result.scalars().all()}
        return [found[product_id] for product_id in ids if product_id in found]
