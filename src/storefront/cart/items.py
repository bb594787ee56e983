"""Cart item management — commands and handler.

Carts are created lazily: the first access or write for a customer creates
the cart.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalog.product import Product
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class OpenCart:
    customer_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def _cart_for(repo, customer_id) -> ShoppingCart:
    cart = repo.for_customer(customer_id)
    if cart is None:
        cart = ShoppingCart.create(customer_id=customer_id)
    return cart


def _available(product_id, variant_id=None) -> int:
    product = current_domain.repository_for(Product).get_active(product_id)
    if product is None:
        raise ValidationError({"product_id": [f"Product {product_id} not found"]})
    if variant_id and product.variant(variant_id) is None:
        raise ValidationError({"variant_id": [f"Variant {variant_id} does not belong to product {product_id}"]})
    return product.available(variant_id)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = ShoppingCart.create(customer_id=command.customer_id)
            repo.add(cart)
        return str(cart.id)

    @handle(AddToCart)
    def add_to_cart(self, command):
        available = _available(command.product_id, command.variant_id)
        repo = current_domain.repository_for(ShoppingCart)
        cart = _cart_for(repo, command.customer_id)
        item_id = cart.add_item(
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            available=available,
        )
        repo.add(cart)
        return item_id

    @handle(UpdateCartQuantity)
    def update_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _cart_for(repo, command.customer_id)
        item = cart.item(command.item_id)
        available = _available(item.product_id, item.variant_id)
        cart.update_item_quantity(command.item_id, command.quantity, available)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _cart_for(repo, command.customer_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
