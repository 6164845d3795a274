"""
Storefront Backend: Field Validation Rules
==========================================

What:  Per-field predicate checks run before an entity is written.
How:   Every rule has the signature ``rule(value, field) -> RuleResult`` and
       never raises. ``check()`` runs a rule table over candidate values and
       returns the first failure; repositories turn that failure into a
       ValidationError before touching the database.
Who:   Repositories (create/update) and their unit tests.

Product rules:
    name       non-empty, at least 2 characters, not entirely lowercase
    avatarUrl  well-formed URL (scheme optional, http/https/ftp, needs a TLD)
    rating     integer in [1, 5]
    quantity   integer in [1, 1000]
    price      number in [0.01, 1000.00]

Numeric rules accept ints, floats, Decimals and numeric strings. Booleans
are rejected even though ``bool`` is an ``int`` subclass.
"""

import re
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from pydantic import AnyUrl, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from storefront.roles import ROLES


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one rule: the field checked, pass/fail, and why it failed."""

    field: str
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def passed(cls, field: str) -> "RuleResult":
        return cls(field=field, ok=True)

    @classmethod
    def failed(cls, field: str, reason: str) -> "RuleResult":
        return cls(field=field, ok=False, reason=reason)


Rule = Callable[[Any, str], RuleResult]

_URL_ADAPTER = TypeAdapter(AnyUrl)
_EMAIL_ADAPTER = TypeAdapter(EmailStr)
_URL_SCHEMES = {"http", "https", "ftp"}


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

def _to_number(value: Any) -> Optional[Decimal]:
    """Finite Decimal for numeric input, None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        try:
            candidate = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not candidate.is_finite():
        return None
    return candidate


def _integer_in_range(value: Any, field: str, low: int, high: int) -> RuleResult:
    number = _to_number(value)
    if number is None or number != number.to_integral_value() or not low <= number <= high:
        return RuleResult.failed(
            field, f"Invalid {field}: must be an integer between {low} and {high}"
        )
    return RuleResult.passed(field)


def is_identifier(value: Any) -> bool:
    """True when value is a UUID or a string that parses as one."""
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


# ══════════════════════════════════════════════════════════════════════════
# Product Rules
# ══════════════════════════════════════════════════════════════════════════

def validate_name(value: Any, field: str = "name") -> RuleResult:
    if not isinstance(value, str) or value == "":
        return RuleResult.failed(field, f"Invalid {field}: must not be empty")
    if len(value) < 2:
        return RuleResult.failed(field, f"Invalid {field}: must be at least 2 characters long")
    # "123" is its own lowercase form and is rejected too
    if value == value.lower():
        return RuleResult.failed(field, f"Invalid {field}: must not be entirely lowercase")
    return RuleResult.passed(field)


def validate_url(value: Any, field: str = "avatarUrl") -> RuleResult:
    failure = RuleResult.failed(field, f"Invalid {field}: must be a valid URL")
    if not isinstance(value, str):
        return failure
    candidate = value.strip()
    if not candidate or any(char.isspace() for char in candidate):
        return failure
    if "://" not in candidate:
        candidate = f"http://{candidate}"
    try:
        url = _URL_ADAPTER.validate_python(candidate)
    except PydanticValidationError:
        return failure
    host = (url.host or "").strip(".")
    if url.scheme not in _URL_SCHEMES or "." not in host:
        return failure
    return RuleResult.passed(field)


def validate_rating(value: Any, field: str = "rating") -> RuleResult:
    return _integer_in_range(value, field, 1, 5)


def validate_quantity(value: Any, field: str = "quantity") -> RuleResult:
    return _integer_in_range(value, field, 1, 1000)


def validate_price(value: Any, field: str = "price") -> RuleResult:
    number = _to_number(value)
    if number is None or not Decimal("0.01") <= number <= Decimal("1000.00"):
        return RuleResult.failed(field, f"Invalid {field}: must be a number between 0.01 and 1000.00")
    return RuleResult.passed(field)


# ══════════════════════════════════════════════════════════════════════════
# Order Rules
# ══════════════════════════════════════════════════════════════════════════

def validate_required_text(value: Any, field: str = "name") -> RuleResult:
    if not isinstance(value, str) or not value.strip():
        return RuleResult.failed(field, f"Invalid {field}: must not be empty")
    return RuleResult.passed(field)


def validate_shopping_cart(value: Any, field: str = "shoppingCart") -> RuleResult:
    """
    Cart shape: {"total": number, "items": [{product, promo_price,
    discount_percent, quantity}, ...]}.

    Item fields are optional, but when present the numeric ones must be
    numbers and ``product`` must be a well-formed product id.
    """
    if not isinstance(value, Mapping):
        return RuleResult.failed(field, f"Invalid {field}: must be an object")
    if _to_number(value.get("total")) is None:
        return RuleResult.failed(field, f"Invalid {field}: total must be a number")
    items = value.get("items", [])
    if not isinstance(items, (list, tuple)):
        return RuleResult.failed(field, f"Invalid {field}: items must be a list")
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            return RuleResult.failed(field, f"Invalid {field}: item {index} must be an object")
        product = item.get("product")
        if product is not None and not is_identifier(product):
            return RuleResult.failed(field, f"Invalid {field}: item {index} has a malformed product id")
        for key in ("promo_price", "discount_percent", "quantity"):
            if item.get(key) is not None and _to_number(item[key]) is None:
                return RuleResult.failed(
                    field, f"Invalid {field}: item {index} {to_camel(key)} must be a number"
                )
    return RuleResult.passed(field)


# ══════════════════════════════════════════════════════════════════════════
# User Rules
# ══════════════════════════════════════════════════════════════════════════

def validate_email(value: Any, field: str = "email") -> RuleResult:
    if not isinstance(value, str):
        return RuleResult.failed(field, f"Invalid {field}")
    try:
        _EMAIL_ADAPTER.validate_python(value.strip())
    except PydanticValidationError:
        return RuleResult.failed(field, f"Invalid {field}")
    return RuleResult.passed(field)


def validate_password(value: Any, field: str = "password") -> RuleResult:
    if not isinstance(value, str) or len(value) < 8:
        return RuleResult.failed(field, f"Invalid {field}: must be at least 8 characters long")
    if not re.search(r"[a-zA-Z]", value) or not re.search(r"\d", value):
        return RuleResult.failed(
            field, f"Invalid {field}: must contain at least one letter and one number"
        )
    # bcrypt only hashes the first 72 bytes
    if len(value.encode("utf-8")) > 72:
        return RuleResult.failed(field, f"Invalid {field}: must be at most 72 bytes long")
    return RuleResult.passed(field)


def validate_role(value: Any, field: str = "role") -> RuleResult:
    if value not in ROLES:
        return RuleResult.failed(field, f"Invalid {field}: must be one of {', '.join(ROLES)}")
    return RuleResult.passed(field)


# ══════════════════════════════════════════════════════════════════════════
# Rule Tables
# ══════════════════════════════════════════════════════════════════════════

PRODUCT_RULES: Mapping[str, Rule] = {
    "name": validate_name,
    "avatar_url": validate_url,
    "rating": validate_rating,
    "quantity": validate_quantity,
    "price": validate_price,
}

ORDER_RULES: Mapping[str, Rule] = {
    "name": validate_required_text,
    "shopping_cart": validate_shopping_cart,
}

USER_RULES: Mapping[str, Rule] = {
    "name": validate_required_text,
    "email": validate_email,
    "password": validate_password,
    "role": validate_role,
}


def check(
    rules: Mapping[str, Rule],
    values: Mapping[str, Any],
    partial: bool = False,
) -> Optional[RuleResult]:
    """
    Run a rule table against candidate values.

    Args:
        rules:   attribute name → rule
        values:  candidate attribute values
        partial: True for updates; only the supplied fields are checked.
                 False for creates; a missing field is checked as None.

    Returns:
        The first failing RuleResult (labelled with the public camelCase
        field name), or None when every checked field passes.
    """
    for attribute, rule in rules.items():
        if partial and attribute not in values:
            continue
        result = rule(values.get(attribute), to_camel(attribute))
        if not result.ok:
            return result
    return None
