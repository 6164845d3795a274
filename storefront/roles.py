"""
Role → rights table used by the permission guard.

A route declares the right it needs (e.g. "manageProducts"); the guard grants
access when the caller's role lists that right.
"""

from typing import Dict, Tuple

USER = "user"
ADMIN = "admin"

ROLE_RIGHTS: Dict[str, Tuple[str, ...]] = {
    USER: (),
    ADMIN: (
        "getUsers",
        "manageUsers",
        "getProducts",
        "manageProducts",
        "getOrders",
        "manageOrders",
    ),
}

ROLES: Tuple[str, ...] = tuple(ROLE_RIGHTS)


def rights_for(role: str) -> Tuple[str, ...]:
    return ROLE_RIGHTS.get(role, ())
