"""Payment aggregate (CQRS) — money captured for one order.

Created once, when the provider confirms the capture. There is at most one
payment per order; repeated confirmations resolve to the existing record.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront
from storefront.payment.events import PaymentRecorded


class PaymentMethod(Enum):
    STRIPE = "Stripe"
    CASH_ON_DELIVERY = "Cash_On_Delivery"


class PaymentStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"


@storefront.aggregate
class Payment:
    order_id = Identifier(required=True, unique=True)
    amount = Float(required=True, min_value=0.0)
    method = String(choices=PaymentMethod, default=PaymentMethod.STRIPE.value)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=255)
    created_at = DateTime()

    @classmethod
    def record_capture(cls, order_id, amount, transaction_id, method=PaymentMethod.STRIPE.value):
        payment = cls(
            order_id=order_id,
            amount=amount,
            method=method,
            status=PaymentStatus.COMPLETED.value,
            transaction_id=transaction_id,
            created_at=datetime.now(UTC),
        )
        payment.raise_(
            PaymentRecorded(
                payment_id=str(payment.id),
                order_id=str(order_id),
                amount=amount,
                method=method,
                transaction_id=transaction_id,
            )
        )
        return payment
