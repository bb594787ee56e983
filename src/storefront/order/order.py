"""Order aggregate (CQRS) — the immutable record of a committed purchase.

Items, snapshot prices and totals are fixed when the order is placed. After
that only the status and the payment/refund links change.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, PROCESSING, SHIPPED)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPaid, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Customers may cancel only before the parcel leaves; stock goes back on the shelf
_CUSTOMER_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}
_RESTOCK_ON_CANCEL_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}

# States in which a refund may be requested
REFUNDABLE_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address copied onto the order at checkout.

    Later changes to the customer's saved addresses do not affect it.
    """

    full_name = String(max_length=255)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line: product, optional variant, quantity and the price paid."""

    product_id = Identifier(required=True)
    variant_id = Identifier()
    title = String(required=True, max_length=255)
    sku = String(required=True, max_length=50)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    coupon_code = String(max_length=50)
    subtotal_amount = Float(default=0.0)
    discount_amount = Float(default=0.0)
    tax_amount = Float(default=0.0)
    shipping_amount = Float(default=0.0)
    total_amount = Float(default=0.0)
    payment_id = Identifier()
    refund_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        items_data,
        totals,
        customer_email=None,
        coupon_code=None,
        shipping_address=None,
    ):
        """Create a committed order.

        Args:
            customer_id: The customer placing the order.
            items_data: List of dicts with product_id, variant_id, title,
                        sku, quantity, unit_price.
            totals: Dict with subtotal, discount, tax, shipping, total.
            shipping_address: Optional dict with the ShippingAddress fields.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            customer_email=customer_email,
            status=OrderStatus.PENDING.value,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            coupon_code=coupon_code,
            subtotal_amount=totals["subtotal"],
            discount_amount=totals.get("discount", 0.0),
            tax_amount=totals.get("tax", 0.0),
            shipping_amount=totals.get("shipping", 0.0),
            total_amount=totals["total"],
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                customer_email=customer_email,
                item_count=sum(item["quantity"] for item in items_data),
                total_amount=order.total_amount,
                coupon_code=coupon_code,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def transition_to(self, target_status):
        """Move to ``target_status`` through the transition table."""
        self._assert_can_transition(target_status)
        previous = OrderStatus(self.status)
        self.status = target_status.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous.value,
                new_status=target_status.value,
            )
        )
        return previous

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def mark_paid(self, payment_id, amount):
        """Link a captured payment; a pending order starts processing.

        Orders that already left PENDING (typically cancelled while the
        confirmation was in flight) keep their status.
        """
        advanced = OrderStatus(self.status) == OrderStatus.PENDING
        self.payment_id = payment_id
        if advanced:
            self.transition_to(OrderStatus.PROCESSING)
        else:
            self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                payment_id=str(payment_id),
                amount=amount,
                status_advanced=advanced,
            )
        )
        return advanced

    def cancel(self, by_customer=True):
        """Cancel the order and report whether its stock must be returned."""
        current = OrderStatus(self.status)
        if by_customer and current not in _CUSTOMER_CANCELLABLE_STATES:
            raise ValidationError({"status": ["Only pending or processing orders can be cancelled"]})

        previous = self.transition_to(OrderStatus.CANCELLED)
        restock = previous in _RESTOCK_ON_CANCEL_STATES
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous.value,
                restocked=restock,
            )
        )
        return restock

    def link_refund(self, refund_id):
        if self.refund_id:
            raise ValidationError({"order_id": ["A refund has already been requested for this order"]})
        if OrderStatus(self.status) not in REFUNDABLE_STATES:
            raise ValidationError({"status": ["Refunds can only be requested for delivered or shipped orders"]})
        self.refund_id = refund_id
        self.updated_at = datetime.now(UTC)

    def belongs_to(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)
