"""
Storefront Backend: Transformer Unit Tests
==========================================

What:  Public projections of products, orders and users.
How:   Plain objects and dicts stand in for stored entities.
"""

import uuid
from types import SimpleNamespace

from storefront.models.order import Order
from storefront.transformers import transform_order, transform_product, transform_user


class TestTransformProduct:

    def test_public_fields_only(self):
        product_id = uuid.uuid4()
        product = SimpleNamespace(
            id=product_id,
            name="Espresso Beans",
            avatar_url="https://cdn.shopmail.com/img/espresso.png",
            price=18.5,
            rating=4,
            quantity=120,
            disabled=False,
            created_at="2026-01-01T00:00:00Z",
            internal_notes="do not ship",
        )

        assert transform_product(product) == {
            "id": str(product_id),
            "name": "Espresso Beans",
            "avatarUrl": "https://cdn.shopmail.com/img/espresso.png",
            "price": 18.5,
            "rating": 4,
            "quantity": 120,
            "disabled": False,
        }

    def test_missing_attributes_are_omitted(self):
        assert transform_product({"name": "Espresso Beans", "price": 2.5}) == {
            "name": "Espresso Beans",
            "price": 2.5,
        }

    def test_same_entity_gives_same_output(self):
        product = {"id": "abc", "name": "Espresso Beans"}
        assert transform_product(product) == transform_product(product)


class TestTransformOrder:

    def test_price_is_cart_total(self):
        order = Order(
            id=uuid.uuid4(),
            name="Weekly Restock",
            shopping_cart={"total": 59.9, "items": [{"product": str(uuid.uuid4()), "quantity": 3}]},
            disabled=False,
            obs="leave at the door",
        )

        result = transform_order(order)

        assert result == {"id": str(order.id), "name": "Weekly Restock", "price": 59.9, "disabled": False}
        assert "shoppingCart" not in result
        assert "obs" not in result


class TestTransformUser:

    def test_password_never_exposed(self):
        user = SimpleNamespace(
            id=uuid.uuid4(),
            name="Alice Moreau",
            email="alice@shopmail.com",
            role="user",
            password="$2b$04$hash",
        )

        result = transform_user(user)

        assert set(result) == {"id", "name", "email", "role"}
        assert "password" not in result
