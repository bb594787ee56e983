"""Hosted checkout: hands a pending order to the payment provider.

The provider collects the money out of band and confirms through the webhook;
nothing here changes the order.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.order.order import Order, OrderStatus
from storefront.payment.gateway import get_gateway
from storefront.payment.gateway.port import CheckoutLineItem, CheckoutSession
from storefront.settings import store_settings
from storefront.shared.money import as_decimal, to_minor_units


def checkout_line_items(order: Order) -> list[CheckoutLineItem]:
    """Line items that add up to the order total.

    Discounted orders are sent as a single line because the provider does not
    accept negative amounts.
    """
    if (order.discount_amount or 0) > 0:
        return [CheckoutLineItem(name=f"Order #{order.id}", unit_amount=to_minor_units(order.total_amount), quantity=1)]

    line_items = [
        CheckoutLineItem(name=item.title, unit_amount=to_minor_units(item.unit_price), quantity=item.quantity)
        for item in order.items
    ]
    if as_decimal(order.tax_amount) > 0:
        line_items.append(CheckoutLineItem(name="Tax", unit_amount=to_minor_units(order.tax_amount), quantity=1))
    if as_decimal(order.shipping_amount) > 0:
        line_items.append(
            CheckoutLineItem(name="Shipping", unit_amount=to_minor_units(order.shipping_amount), quantity=1)
        )
    return line_items


def create_checkout_session(order_id, customer_id, success_url, cancel_url) -> CheckoutSession:
    order = current_domain.repository_for(Order).get_for_customer(order_id, customer_id)
    if OrderStatus(order.status) != OrderStatus.PENDING:
        raise ValidationError({"status": ["Only pending orders can be paid"]})

    session = get_gateway().create_checkout_session(
        order_id=str(order.id),
        line_items=checkout_line_items(order),
        currency=store_settings().currency,
        success_url=success_url,
        cancel_url=cancel_url,
    )
    logger.info("checkout_session_created", order_id=str(order.id), session_id=session.session_id)
    return session
