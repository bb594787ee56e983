"""Payment reconciliation — records a provider-confirmed capture exactly once.

Providers deliver confirmations at least once, so the handler is idempotent:
a second confirmation for the same order returns the payment recorded by the
first.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.payment.payment import Payment, PaymentMethod
from storefront.shared.concurrency import dispatch


@storefront.command(part_of="Payment")
class VerifyPayment:
    order_id = Identifier(required=True)
    transaction_id = String(required=True, max_length=255)
    method = String(max_length=50, default=PaymentMethod.STRIPE.value)


@storefront.command_handler(part_of=Payment)
class VerifyPaymentHandler:
    @handle(VerifyPayment)
    def verify_payment(self, command):
        repo = current_domain.repository_for(Payment)
        existing = repo.for_order(command.order_id)
        if existing is not None:
            logger.info(
                "payment_already_recorded",
                order_id=str(command.order_id),
                payment_id=str(existing.id),
                transaction_id=command.transaction_id,
            )
            return str(existing.id)

        order_repo = current_domain.repository_for(Order)
        try:
            order = order_repo.get(command.order_id)
        except ObjectNotFoundError:
            raise ValidationError({"order_id": ["Order not found"]})

        payment = Payment.record_capture(
            order_id=command.order_id,
            amount=order.total_amount,
            transaction_id=command.transaction_id,
            method=command.method or PaymentMethod.STRIPE.value,
        )
        if not order.mark_paid(payment.id, payment.amount):
            logger.warning(
                "payment_for_non_pending_order",
                order_id=str(order.id),
                status=order.status,
                payment_id=str(payment.id),
            )

        repo.add(payment)
        order_repo.add(order)
        logger.info("payment_recorded", order_id=str(order.id), payment_id=str(payment.id), amount=payment.amount)
        return str(payment.id)


def verify_payment(order_id, transaction_id, method=PaymentMethod.STRIPE.value) -> Payment:
    """Record the capture for ``order_id`` and return the order's payment.

    A concurrent duplicate confirmation that loses the race on the unique
    order_id resolves to the record written by the winner.
    """
    repo = current_domain.repository_for(Payment)
    try:
        dispatch(VerifyPayment(order_id=order_id, transaction_id=transaction_id, method=method))
    except ValidationError:
        existing = repo.for_order(order_id)
        if existing is None:
            raise
        return existing

    return repo.for_order(order_id)
