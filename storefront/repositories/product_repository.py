"""
Product persistence: name is unique, numeric fields are stored in their
column types once the rules have accepted them.
"""

from decimal import Decimal
from typing import Any, Dict

from storefront.models.product import Product
from storefront.repositories.base import Repository
from storefront.validation import PRODUCT_RULES


class ProductRepository(Repository[Product]):
    model = Product
    resource = "product"
    rules = PRODUCT_RULES
    unique_fields = ("name",)
    filter_fields = ("name", "disabled")

    def prepare(self, values: Dict[str, Any]) -> Dict[str, Any]:
        prepared = dict(values)
        # Rules accept "3", 3.0 and 3 alike; the columns want int/float
        for key in ("rating", "quantity"):
            if key in prepared:
                prepared[key] = int(Decimal(str(prepared[key])))
        if "price" in prepared:
            prepared["price"] = float(Decimal(str(prepared["price"])))
        if "avatar_url" in prepared:
            prepared["avatar_url"] = prepared["avatar_url"].strip()
        return prepared
