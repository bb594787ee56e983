"""Tests for Product stock primitives and catalog maintenance."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalog.events import StockReleased, StockReserved
from storefront.catalog.product import Product


def _make_product(stock=10, price=49.99, discounted_price=None):
    return Product.add(title="Canvas Tote", sku="TOTE-001", price=price, discounted_price=discounted_price, stock=stock)


class TestProductCreation:
    def test_add_sets_fields(self):
        product = _make_product()
        assert product.title == "Canvas Tote"
        assert product.sku == "TOTE-001"
        assert product.stock == 10
        assert product.is_deleted is False

    def test_add_raises_product_added_event(self):
        product = _make_product()
        assert product._events[0].__class__.__name__ == "ProductAdded"

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(stock=-1)

    def test_discounted_price_above_price_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _make_product(price=10.0, discounted_price=12.0)
        assert "discounted_price" in exc_info.value.messages


class TestTakeStock:
    def test_decrements_by_requested_quantity(self):
        product = _make_product(stock=10)
        product.take_stock(3)
        assert product.stock == 7

    def test_taking_everything_leaves_zero(self):
        product = _make_product(stock=2)
        product.take_stock(2)
        assert product.stock == 0

    def test_insufficient_stock_rejected_and_unchanged(self):
        product = _make_product(stock=1)
        with pytest.raises(ValidationError) as exc_info:
            product.take_stock(2)
        assert "Insufficient stock for product: Canvas Tote" in exc_info.value.messages["stock"]
        assert product.stock == 1

    def test_raises_stock_reserved_event(self):
        product = _make_product(stock=5)
        product.take_stock(2)
        event = product._events[-1]
        assert isinstance(event, StockReserved)
        assert event.quantity == 2
        assert event.remaining == 3


class TestVariantStock:
    def test_variant_stock_is_separate(self):
        product = _make_product(stock=10)
        variant = product.add_variant(sku="TOTE-001-L", size="L", color="Black", price_diff=5.0, stock=4)
        product.take_stock(3, variant_id=variant.id)
        assert product.variant(variant.id).stock == 1
        assert product.stock == 10

    def test_unknown_variant_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc_info:
            product.take_stock(1, variant_id="no-such-variant")
        assert "variant_id" in exc_info.value.messages

    def test_duplicate_variant_sku_rejected(self):
        product = _make_product()
        product.add_variant(sku="TOTE-001-L", size="L")
        with pytest.raises(ValidationError):
            product.add_variant(sku="TOTE-001-L", size="XL")

    def test_available_reports_variant_stock(self):
        product = _make_product(stock=10)
        variant = product.add_variant(sku="TOTE-001-S", size="S", stock=2)
        assert product.available() == 10
        assert product.available(variant.id) == 2


class TestReturnAndReplenish:
    def test_return_stock_adds_back(self):
        product = _make_product(stock=5)
        product.take_stock(5)
        product.return_stock(5)
        assert product.stock == 5
        assert isinstance(product._events[-1], StockReleased)

    def test_add_stock(self):
        product = _make_product(stock=0)
        product.add_stock(12)
        assert product.stock == 12


class TestCatalogMaintenance:
    def test_change_price_to_below_current_discount(self):
        product = _make_product(price=50.0, discounted_price=40.0)
        product.change_price(30.0, discounted_price=25.0)
        assert product.price == 30.0
        assert product.discounted_price == 25.0

    def test_delete_is_soft(self):
        product = _make_product()
        product.delete()
        assert product.is_deleted is True

    def test_delete_twice_rejected(self):
        product = _make_product()
        product.delete()
        with pytest.raises(ValidationError):
            product.delete()

    def test_cannot_add_variant_to_deleted_product(self):
        product = _make_product()
        product.delete()
        with pytest.raises(ValidationError):
            product.add_variant(sku="X-1")
