"""
Storefront Backend: Validation Rule Unit Tests
==============================================

What:  Every field rule, plus check() over the rule tables.
How:   Pure functions; no database.
"""

import uuid

import pytest

from storefront.validation import (
    ORDER_RULES,
    PRODUCT_RULES,
    USER_RULES,
    check,
    validate_email,
    validate_name,
    validate_password,
    validate_price,
    validate_quantity,
    validate_rating,
    validate_role,
    validate_shopping_cart,
    validate_url,
)


class TestNameRule:

    def test_mixed_case_name_passes(self):
        assert validate_name("Espresso Beans").ok

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_empty_or_non_string_fails(self, value):
        result = validate_name(value)
        assert not result.ok
        assert result.field == "name"

    def test_single_character_fails(self):
        result = validate_name("R")
        assert not result.ok
        assert "at least 2" in result.reason

    def test_all_lowercase_fails(self):
        result = validate_name("massa")
        assert not result.ok
        assert "lowercase" in result.reason

    def test_digits_only_count_as_lowercase(self):
        assert not validate_name("123").ok


class TestUrlRule:

    @pytest.mark.parametrize("value", [
        "https://cdn.shopmail.com/img/espresso.png",
        "http://shopmail.com",
        "cdn.shopmail.com/img.png",
        "ftp://files.shopmail.com/catalog.csv",
    ])
    def test_valid_urls_pass(self, value):
        assert validate_url(value).ok

    @pytest.mark.parametrize("value", [
        "not a url",
        "localhost:3000/img.png",
        "javascript://shopmail.com/x",
        "",
        None,
    ])
    def test_invalid_urls_fail(self, value):
        result = validate_url(value)
        assert not result.ok
        assert result.field == "avatarUrl"


class TestNumericRules:

    @pytest.mark.parametrize("value", [1, 5, "3", 4.0])
    def test_rating_in_range_passes(self, value):
        assert validate_rating(value).ok

    @pytest.mark.parametrize("value", [0, 6, -1, 2.5, "fewfewfw", True, None])
    def test_rating_out_of_range_or_not_integer_fails(self, value):
        assert not validate_rating(value).ok

    @pytest.mark.parametrize("value", [1, 1000, "500"])
    def test_quantity_bounds_pass(self, value):
        assert validate_quantity(value).ok

    @pytest.mark.parametrize("value", [0, 1001, -1, "fewfewfw", 10.5])
    def test_quantity_out_of_range_fails(self, value):
        assert not validate_quantity(value).ok

    @pytest.mark.parametrize("value", [0.01, 1000, "23.32", 999.99])
    def test_price_in_range_passes(self, value):
        assert validate_price(value).ok

    @pytest.mark.parametrize("value", [0, 0.001, 1000.01, "free", float("inf"), False])
    def test_price_out_of_range_fails(self, value):
        result = validate_price(value)
        assert not result.ok
        assert "0.01" in result.reason


class TestOrderRules:

    def test_cart_with_items_passes(self):
        cart = {
            "total": 59.9,
            "items": [
                {"product": str(uuid.uuid4()), "promo_price": 19.9, "discount_percent": 10, "quantity": 3},
            ],
        }
        assert validate_shopping_cart(cart).ok

    def test_cart_without_items_passes(self):
        assert validate_shopping_cart({"total": 0}).ok

    def test_missing_total_fails(self):
        assert not validate_shopping_cart({"items": []}).ok

    def test_malformed_product_reference_fails(self):
        result = validate_shopping_cart({"total": 10, "items": [{"product": "not-an-id"}]})
        assert not result.ok
        assert "product id" in result.reason

    def test_non_numeric_item_field_fails(self):
        result = validate_shopping_cart({"total": 10, "items": [{"quantity": "lots"}]})
        assert not result.ok
        assert "quantity" in result.reason


class TestUserRules:

    def test_valid_email_passes(self):
        assert validate_email("alice@shopmail.com").ok

    @pytest.mark.parametrize("value", ["invalidEmail", "alice@", None])
    def test_invalid_email_fails(self, value):
        assert not validate_email(value).ok

    def test_password_with_letters_and_digits_passes(self):
        assert validate_password("password1").ok

    @pytest.mark.parametrize("value", ["passwo1", "password", "11111111"])
    def test_weak_password_fails(self, value):
        assert not validate_password(value).ok

    def test_unknown_role_fails(self):
        assert validate_role("admin").ok
        assert not validate_role("invalid").ok


class TestCheck:

    def test_create_reports_missing_field(self):
        values = {"name": "Espresso Beans", "avatar_url": "https://shopmail.com/a.png", "rating": 3, "quantity": 1}
        result = check(PRODUCT_RULES, values)
        assert result is not None
        assert result.field == "price"

    def test_partial_checks_only_supplied_fields(self):
        assert check(PRODUCT_RULES, {"rating": 4}, partial=True) is None

    def test_partial_reports_bad_supplied_field(self):
        result = check(PRODUCT_RULES, {"quantity": 1001}, partial=True)
        assert result.field == "quantity"

    def test_failure_uses_public_field_name(self):
        result = check(PRODUCT_RULES, {"avatar_url": "nope"}, partial=True)
        assert result.field == "avatarUrl"

    def test_order_and_user_tables(self):
        assert check(ORDER_RULES, {"name": "Weekly restock", "shopping_cart": {"total": 1}}) is None
        assert check(USER_RULES, {"email": "x"}, partial=True).field == "email"
