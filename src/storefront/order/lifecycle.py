"""Order lifecycle after placement — cancellation and staff status updates."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order, OrderStatus


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


def _restock(order):
    ledger = InventoryLedger.for_products(item.product_id for item in order.items)
    for item in order.items:
        if not ledger.has_product(item.product_id):
            continue
        ledger.release(item.product_id, item.quantity, variant_id=item.variant_id)
    ledger.flush()


def _parse_status(value) -> OrderStatus:
    for status in OrderStatus:
        if value in (status.value, status.name):
            return status
    raise ValidationError({"status": [f"Unknown order status: {value}"]})


@storefront.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_customer(command.order_id, command.customer_id)

        if order.cancel(by_customer=True):
            _restock(order)
        repo.add(order)
        logger.info("order_cancelled", order_id=str(order.id), customer_id=str(command.customer_id))

    @handle(UpdateOrderStatus)
    def update_status(self, command):
        target = _parse_status(command.status)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if target == OrderStatus.CANCELLED:
            if order.cancel(by_customer=False):
                _restock(order)
        else:
            order.transition_to(target)
        repo.add(order)
        logger.info("order_status_updated", order_id=str(order.id), status=order.status)
