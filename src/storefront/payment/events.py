"""Domain events for the Payment aggregate."""

from protean.fields import Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Payment")
class PaymentRecorded:
    """A confirmed capture was recorded against an order."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    method = String(required=True)
    transaction_id = String()
