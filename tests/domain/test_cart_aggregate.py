"""Tests for the ShoppingCart aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.events import CartCleared, CartItemAdded


def _make_cart():
    return ShoppingCart.create(customer_id="cust-001")


class TestCartItems:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item("prod-1", quantity=2, available=10)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert isinstance(cart._events[-1], CartItemAdded)

    def test_same_product_merges(self):
        cart = _make_cart()
        first = cart.add_item("prod-1", quantity=2, available=10)
        second = cart.add_item("prod-1", quantity=3, available=10)
        assert first == second
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_variants_are_separate_lines(self):
        cart = _make_cart()
        cart.add_item("prod-1", quantity=1, available=10, variant_id="var-s")
        cart.add_item("prod-1", quantity=1, available=10, variant_id="var-m")
        assert len(cart.items) == 2

    def test_quantity_above_stock_rejected(self):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc_info:
            cart.add_item("prod-1", quantity=4, available=3)
        assert exc_info.value.messages["quantity"] == ["Cannot add more than 3 items of this product"]

    def test_merged_quantity_checked_against_stock(self):
        cart = _make_cart()
        cart.add_item("prod-1", quantity=2, available=3)
        with pytest.raises(ValidationError):
            cart.add_item("prod-1", quantity=2, available=3)
        assert cart.items[0].quantity == 2

    def test_update_quantity(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-1", quantity=1, available=10)
        cart.update_item_quantity(item_id, 4, available=10)
        assert cart.items[0].quantity == 4

    def test_update_quantity_above_stock_rejected(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-1", quantity=1, available=10)
        with pytest.raises(ValidationError) as exc_info:
            cart.update_item_quantity(item_id, 4, available=3)
        assert exc_info.value.messages["quantity"] == ["Cannot set quantity to more than 3 items"]
        assert cart.items[0].quantity == 1

    def test_update_unknown_item_rejected(self):
        with pytest.raises(ValidationError):
            _make_cart().update_item_quantity("nope", 1, available=10)

    def test_remove_item(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-1", quantity=1, available=10)
        cart.remove_item(item_id)
        assert len(cart.items) == 0

    def test_clear(self):
        cart = _make_cart()
        cart.add_item("prod-1", quantity=1, available=10)
        cart.add_item("prod-2", quantity=1, available=10)
        cart.clear()
        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartCleared)
