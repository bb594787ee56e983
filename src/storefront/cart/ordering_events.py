"""Empties the customer's cart once an order has been committed."""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class CartOrderEventHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(event.customer_id)
        if cart is None or not cart.items:
            return

        # The order stands even if the cart cannot be emptied
        try:
            cart.clear()
            repo.add(cart)
        except Exception as exc:
            logger.error("cart_clear_failed", order_id=str(event.order_id), error=str(exc))
            return

        logger.info("cart_cleared_after_order", order_id=str(event.order_id), customer_id=str(event.customer_id))
