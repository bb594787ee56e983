"""BDD tests for order commitment."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from storefront.coupon.coupon import Coupon
from storefront.order.commitment import place_order
from storefront.order.order import Order

scenarios("features/order_commitment.feature")


def error_messages(exc):
    return [message for messages in exc.messages.values() for message in messages]


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{customer}" orders {quantity:d} of "{title}"'), target_fixture="order_id")
def order_products(products, error, customer, quantity, title):
    try:
        return place_order(customer_id=customer, items=[{"product_id": products[title], "quantity": quantity}])
    except ValidationError as exc:
        error["exc"] = exc


@when(
    parsers.cfparse('customer "{customer}" applies coupon "{code}" to an order of {quantity:d} "{title}"'),
    target_fixture="order_id",
)
def order_with_coupon(products, error, customer, code, quantity, title):
    try:
        return place_order(
            customer_id=customer,
            items=[{"product_id": products[title], "quantity": quantity}],
            coupon_code=code,
        )
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is placed")
def order_is_placed(order_id, error):
    assert error["exc"] is None
    assert current_domain.repository_for(Order).get(order_id).status == "Pending"


@then(parsers.cfparse("the order total is {total:f}"))
def order_total_is(order_id, total):
    assert current_domain.repository_for(Order).get(order_id).total_amount == total


@then(parsers.cfparse('the order is rejected with "{message}"'))
def order_is_rejected(order_id, error, message):
    assert order_id is None
    assert error["exc"] is not None
    assert message in error_messages(error["exc"])


@then(parsers.cfparse('coupon "{code}" has been used {count:d} times'))
def coupon_usage_is(code, count):
    assert current_domain.repository_for(Coupon).find_by_code(code).used_count == count
