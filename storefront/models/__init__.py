"""ORM models. Importing this package registers every table on Base.metadata."""

from storefront.models.order import Order
from storefront.models.product import Product
from storefront.models.user import User

__all__ = ["Order", "Product", "User"]
