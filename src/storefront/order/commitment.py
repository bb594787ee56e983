"""Order commitment — turns requested lines into an immutable order.

One command, one Unit of Work: stock reservations, the coupon redemption and
the new order are persisted together or not at all. Every check runs before
the first write, so a rejected order never touches the store.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalog.pricing import line_sku, line_title, price_of
from storefront.coupon.coupon import Coupon
from storefront.coupon.validator import evaluate, find_coupon
from storefront.domain import logger, storefront
from storefront.inventory.ledger import InventoryLedger, StockLine
from storefront.order.order import Order
from storefront.settings import store_settings
from storefront.shared.concurrency import CONFLICT_ERRORS, dispatch
from storefront.shared.money import as_decimal, to_cents


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    items = Text(required=True)  # JSON: [{"product_id", "variant_id"?, "quantity"}]
    coupon_code = String(max_length=50)
    shipping_address = Text()  # JSON: ShippingAddress fields


def _parse_lines(raw_items) -> list[StockLine]:
    items = json.loads(raw_items) if isinstance(raw_items, str) else raw_items
    lines = []
    for item in items or []:
        quantity = item.get("quantity")
        if not item.get("product_id"):
            raise ValidationError({"items": ["Every item needs a product_id"]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"items": ["Item quantity must be a positive integer"]})
        lines.append(StockLine(product_id=str(item["product_id"]), quantity=quantity, variant_id=item.get("variant_id")))
    return lines


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = _parse_lines(command.items)
        if not lines:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        ledger = InventoryLedger.for_order_lines(lines)
        ledger.ensure_available(lines)

        subtotal = as_decimal(0)
        items_data = []
        for line in lines:
            product = ledger.product(line.product_id)
            variant = product.variant(line.variant_id) if line.variant_id else None
            unit_price = price_of(product, variant)

            ledger.reserve(line.product_id, line.quantity, variant_id=line.variant_id)

            subtotal += as_decimal(unit_price) * line.quantity
            items_data.append(
                {
                    "product_id": line.product_id,
                    "variant_id": line.variant_id,
                    "title": line_title(product, variant),
                    "sku": line_sku(product, variant),
                    "quantity": line.quantity,
                    "unit_price": unit_price,
                }
            )

        coupon = None
        discount = as_decimal(0)
        if command.coupon_code:
            coupon = find_coupon(command.coupon_code)
            quote = evaluate(coupon, subtotal)
            discount = as_decimal(quote.discount_amount)
            coupon.redeem()

        settings = store_settings()
        tax = as_decimal(to_cents(subtotal * as_decimal(settings.tax_percent) / 100))
        shipping = as_decimal(to_cents(settings.shipping_flat))
        total = max(as_decimal(0), subtotal + tax + shipping - discount)

        shipping_address = command.shipping_address
        if isinstance(shipping_address, str):
            shipping_address = json.loads(shipping_address)

        order = Order.place(
            customer_id=command.customer_id,
            customer_email=command.customer_email,
            items_data=items_data,
            totals={
                "subtotal": to_cents(subtotal),
                "discount": to_cents(discount),
                "tax": to_cents(tax),
                "shipping": to_cents(shipping),
                "total": to_cents(total),
            },
            coupon_code=coupon.code if coupon else None,
            shipping_address=shipping_address or None,
        )

        # All checks passed: persist stock, coupon and order together
        ledger.flush()
        if coupon is not None:
            current_domain.repository_for(Coupon).add(coupon)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total=order.total_amount,
            coupon_code=order.coupon_code,
        )
        return str(order.id)


def place_order(customer_id, items, coupon_code=None, shipping_address=None, customer_email=None) -> str:
    """Commit an order and return its id.

    Protean re-runs the handler in a fresh Unit of Work when a concurrent writer
    changed the same products or coupon, so every attempt re-reads stock and
    coupon usage. A conflict that outlasts those retries is reported as a
    validation failure the customer can retry.
    """
    command = PlaceOrder(
        customer_id=customer_id,
        customer_email=customer_email,
        items=json.dumps(items),
        coupon_code=coupon_code,
        shipping_address=json.dumps(shipping_address) if shipping_address else None,
    )
    try:
        return dispatch(command)
    except CONFLICT_ERRORS as exc:
        logger.warning(
            "order_commit_conflict",
            customer_id=str(customer_id),
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise ValidationError({"order": ["Stock changed while placing the order, please retry"]}) from exc
