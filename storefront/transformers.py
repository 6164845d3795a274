"""
Storefront Backend: Resource Transformers
=========================================

What:  Project a stored entity onto its public representation.
How:   Pure functions taking the entity as an explicit argument. Only the
       attributes in each resource's public list are read; an attribute the
       entity does not carry is left out of the result.
Who:   Route handlers, right before returning a response.

Public fields:
    Product  id, name, avatarUrl, price, rating, quantity, disabled
    Order    id, name, price (cart total), disabled
    User     id, name, email, role

Anything else on the entity (password hashes, timestamps, the raw cart
document) never appears in the output.
"""

import uuid
from typing import Any, Dict, Sequence, Tuple

_MISSING = object()

# (attribute, public key) pairs
PRODUCT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("avatar_url", "avatarUrl"),
    ("price", "price"),
    ("rating", "rating"),
    ("quantity", "quantity"),
    ("disabled", "disabled"),
)

ORDER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("price", "price"),
    ("disabled", "disabled"),
)

USER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("email", "email"),
    ("role", "role"),
)


def project(entity: Any, fields: Sequence[Tuple[str, str]]) -> Dict[str, Any]:
    """Pick the listed attributes from entity (object or mapping)."""
    out: Dict[str, Any] = {}
    for attribute, key in fields:
        if isinstance(entity, dict):
            value = entity.get(attribute, _MISSING)
        else:
            value = getattr(entity, attribute, _MISSING)
        if value is _MISSING:
            continue
        out[key] = str(value) if isinstance(value, uuid.UUID) else value
    return out


def transform_product(product: Any) -> Dict[str, Any]:
    return project(product, PRODUCT_FIELDS)


def transform_order(order: Any) -> Dict[str, Any]:
    return project(order, ORDER_FIELDS)


def transform_user(user: Any) -> Dict[str, Any]:
    return project(user, USER_FIELDS)
