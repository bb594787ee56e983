"""Shopping Cart aggregate (CQRS) — one mutable cart per customer.

Cart lines are intentions, not reservations: quantities are checked against
the stock available at the time of the change, but nothing is held until the
order is committed.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    def find_item(self, product_id, variant_id=None):
        wanted_variant = str(variant_id) if variant_id else None
        return next(
            (
                i
                for i in self.items
                if str(i.product_id) == str(product_id)
                and (str(i.variant_id) if i.variant_id else None) == wanted_variant
            ),
            None,
        )

    def add_item(self, product_id, quantity, available, variant_id=None):
        """Add an item, merging with an existing line for the same product/variant."""
        existing = self.find_item(product_id, variant_id)
        resulting = quantity + (existing.quantity if existing else 0)
        if resulting > available:
            raise ValidationError({"quantity": [f"Cannot add more than {available} items of this product"]})

        now = datetime.now(UTC)
        if existing:
            existing.quantity = resulting
            item_id = str(existing.id)
        else:
            item = CartItem(product_id=product_id, variant_id=variant_id, quantity=quantity, added_at=now)
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                product_id=str(product_id),
                variant_id=str(variant_id) if variant_id else None,
                quantity=quantity,
            )
        )
        return item_id

    def item(self, item_id) -> CartItem:
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        return item

    def update_item_quantity(self, item_id, new_quantity, available):
        item = self.item(item_id)
        if new_quantity > available:
            raise ValidationError({"quantity": [f"Cannot set quantity to more than {available} items"]})

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self.item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), customer_id=str(self.customer_id)))
