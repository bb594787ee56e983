"""Shared BDD fixtures and step definitions for the storefront."""

from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalog.management import AddProduct
from storefront.catalog.product import Product
from storefront.coupon.management import CreateCoupon
from storefront.order.commitment import place_order
from storefront.order.lifecycle import CancelOrder, UpdateOrderStatus
from storefront.order.order import Order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids by title."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced at {price:f} with {stock:d} in stock'))
def product_in_stock(products, title, price, stock):
    products[title] = current_domain.process(
        AddProduct(title=title, sku=title.upper().replace(" ", "-"), price=price, stock=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('a {percent:d} percent coupon "{code}" with a minimum order of {minimum:f}'))
def percentage_coupon(percent, code, minimum):
    current_domain.process(
        CreateCoupon(
            code=code,
            discount=float(percent),
            expiry_date=datetime.now(UTC) + timedelta(days=30),
            min_total=minimum,
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('a flat {amount:f} coupon "{code}" limited to {limit:d} use'))
def flat_coupon(amount, code, limit):
    current_domain.process(
        CreateCoupon(
            code=code,
            discount=amount,
            is_flat=True,
            expiry_date=datetime.now(UTC) + timedelta(days=30),
            usage_limit=limit,
        ),
        asynchronous=False,
    )


@given(
    parsers.cfparse('customer "{customer}" has ordered {quantity:d} of "{title}"'),
    target_fixture="order_id",
)
def existing_order(products, customer, quantity, title):
    return place_order(customer_id=customer, items=[{"product_id": products[title], "quantity": quantity}])


@given(
    parsers.cfparse('customer "{customer}" has used coupon "{code}" on an order of {quantity:d} "{title}"'),
    target_fixture="order_id",
)
def existing_order_with_coupon(products, customer, quantity, title, code):
    return place_order(
        customer_id=customer,
        items=[{"product_id": products[title], "quantity": quantity}],
        coupon_code=code,
    )


@given("the order has been delivered")
def order_delivered(order_id):
    for status in ("Processing", "Shipped", "Delivered"):
        current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


@given(parsers.cfparse('customer "{customer}" has cancelled the order'))
def order_cancelled(order_id, customer):
    current_domain.process(CancelOrder(order_id=order_id, customer_id=customer), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{title}" has {stock:d} in stock'))
def product_stock_is(products, title, stock):
    assert current_domain.repository_for(Product).get(products[title]).stock == stock


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status
