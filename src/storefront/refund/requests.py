"""Refund requests and review — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import REFUNDABLE_STATES, Order, OrderStatus
from storefront.refund.refund import Refund, RefundStatus


@storefront.command(part_of="Refund")
class RequestRefund:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = Text()


@storefront.command(part_of="Refund")
class UpdateRefundStatus:
    refund_id = Identifier(required=True)
    status = String(required=True, max_length=20)


def _parse_status(value) -> RefundStatus:
    for status in RefundStatus:
        if value in (status.value, status.name):
            return status
    raise ValidationError({"status": [f"Unknown refund status: {value}"]})


@storefront.command_handler(part_of=Refund)
class RefundHandler:
    @handle(RequestRefund)
    def request_refund(self, command):
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get_for_customer(command.order_id, command.customer_id)

        if OrderStatus(order.status) not in REFUNDABLE_STATES:
            raise ValidationError({"status": ["Refunds can only be requested for delivered or shipped orders"]})

        refund_repo = current_domain.repository_for(Refund)
        if order.refund_id or refund_repo.for_order(order.id) is not None:
            raise ValidationError({"order_id": ["A refund has already been requested for this order"]})

        refund = Refund.request(
            order_id=order.id,
            customer_id=command.customer_id,
            amount=order.total_amount,
            reason=command.reason,
        )
        order.link_refund(refund.id)

        refund_repo.add(refund)
        order_repo.add(order)
        logger.info("refund_requested", order_id=str(order.id), refund_id=str(refund.id), amount=refund.amount)
        return str(refund.id)

    @handle(UpdateRefundStatus)
    def update_refund_status(self, command):
        target = _parse_status(command.status)
        repo = current_domain.repository_for(Refund)
        refund = repo.get(command.refund_id)
        refund.transition_to(target)
        repo.add(refund)
        logger.info("refund_status_updated", refund_id=str(refund.id), status=refund.status)
