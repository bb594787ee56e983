"""Domain events for the Refund aggregate."""

from protean.fields import Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Refund")
class RefundRequested:
    """A customer asked for the money back on a shipped or delivered order."""

    __version__ = 1

    refund_id = Identifier(required=True)
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    amount = Float(required=True)
    reason = String()


@storefront.event(part_of="Refund")
class RefundStatusChanged:
    """Staff moved the refund through its review."""

    __version__ = 1

    refund_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
