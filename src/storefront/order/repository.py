from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """Orders of one customer, newest first."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items

    def get_for_customer(self, order_id, customer_id) -> Order:
        """Load an order, treating another customer's order as missing."""
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            order = None
        if order is None or not order.belongs_to(customer_id):
            raise ObjectNotFoundError(f"Order {order_id} not found")
        return order
