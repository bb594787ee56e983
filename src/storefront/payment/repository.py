from storefront.domain import storefront
from storefront.payment.payment import Payment


@storefront.repository(part_of=Payment)
class PaymentRepository:
    def for_order(self, order_id) -> Payment | None:
        return self._dao.query.filter(order_id=str(order_id)).all().first
