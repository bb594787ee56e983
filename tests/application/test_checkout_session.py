"""Application tests for hosted checkout session creation."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.order.commitment import place_order
from storefront.order.lifecycle import CancelOrder
from storefront.payment.checkout import create_checkout_session
from storefront.payment.gateway import get_gateway, set_gateway
from storefront.payment.gateway.fake_adapter import FakeGateway
from storefront.payment.gateway.port import PaymentProviderError


@pytest.fixture
def gateway():
    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


class TestCreateCheckoutSession:
    def test_returns_session(self, gateway, make_product):
        product_id = make_product(title="Canvas Tote", price=49.99)
        order_id = place_order(customer_id="cust-001", items=[{"product_id": product_id, "quantity": 2}])

        session = create_checkout_session(order_id, "cust-001", "https://shop/success", "https://shop/cancel")

        assert session.session_id.startswith("cs_fake_")
        call = gateway.calls[-1]
        assert call["order_id"] == order_id
        assert call["line_items"][0].name == "Canvas Tote"
        assert call["line_items"][0].unit_amount == 4999
        assert call["line_items"][0].quantity == 2

    def test_discounted_order_sent_as_single_line(self, gateway, make_product, make_coupon):
        product_id = make_product(price=100.0)
        make_coupon(code="SAVE10", discount=10.0)
        order_id = place_order(
            customer_id="cust-001", items=[{"product_id": product_id, "quantity": 1}], coupon_code="SAVE10"
        )

        create_checkout_session(order_id, "cust-001", "https://shop/success", "https://shop/cancel")

        line_items = gateway.calls[-1]["line_items"]
        assert len(line_items) == 1
        assert line_items[0].unit_amount == 9000

    def test_only_pending_orders(self, gateway, make_product):
        product_id = make_product()
        order_id = place_order(customer_id="cust-001", items=[{"product_id": product_id, "quantity": 1}])
        current_domain.process(CancelOrder(order_id=order_id, customer_id="cust-001"), asynchronous=False)

        with pytest.raises(ValidationError):
            create_checkout_session(order_id, "cust-001", "https://shop/success", "https://shop/cancel")
        assert gateway.calls == []

    def test_other_customers_order_is_not_found(self, gateway, make_product):
        product_id = make_product()
        order_id = place_order(customer_id="cust-001", items=[{"product_id": product_id, "quantity": 1}])

        with pytest.raises(ObjectNotFoundError):
            create_checkout_session(order_id, "cust-999", "https://shop/success", "https://shop/cancel")

    def test_provider_failure_surfaces(self, gateway, make_product):
        product_id = make_product()
        order_id = place_order(customer_id="cust-001", items=[{"product_id": product_id, "quantity": 1}])
        gateway.configure(should_succeed=False, failure_reason="Stripe is down")

        with pytest.raises(PaymentProviderError):
            create_checkout_session(order_id, "cust-001", "https://shop/success", "https://shop/cancel")


def test_default_gateway_is_fake(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    assert isinstance(get_gateway(), FakeGateway)
