from storefront.domain import storefront
from storefront.refund.refund import Refund


@storefront.repository(part_of=Refund)
class RefundRepository:
    def for_order(self, order_id) -> Refund | None:
        return self._dao.query.filter(order_id=str(order_id)).all().first

    def list_all(self) -> list[Refund]:
        return self._dao.query.order_by("-created_at").all().items
