"""Refund aggregate (CQRS) — one review per order.

State Machine:
    PENDING → APPROVED → COMPLETED
    PENDING → REJECTED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront
from storefront.refund.events import RefundRequested, RefundStatusChanged


class RefundStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    COMPLETED = "Completed"


_VALID_TRANSITIONS = {
    RefundStatus.PENDING: {RefundStatus.APPROVED, RefundStatus.REJECTED},
    RefundStatus.APPROVED: {RefundStatus.COMPLETED},
    RefundStatus.REJECTED: set(),  # Terminal
    RefundStatus.COMPLETED: set(),  # Terminal
}


@storefront.aggregate
class Refund:
    order_id = Identifier(required=True, unique=True)
    customer_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    reason = Text()
    status = String(choices=RefundStatus, default=RefundStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def request(cls, order_id, customer_id, amount, reason=None):
        now = datetime.now(UTC)
        refund = cls(
            order_id=order_id,
            customer_id=customer_id,
            amount=amount,
            reason=reason,
            status=RefundStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        refund.raise_(
            RefundRequested(
                refund_id=str(refund.id),
                order_id=str(order_id),
                customer_id=str(customer_id),
                amount=amount,
                reason=reason,
            )
        )
        return refund

    def transition_to(self, target_status):
        current = RefundStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

        self.status = target_status.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            RefundStatusChanged(
                refund_id=str(self.id),
                order_id=str(self.order_id),
                previous_status=current.value,
                new_status=target_status.value,
            )
        )
