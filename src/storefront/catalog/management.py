"""Catalog administration — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    title = String(required=True, max_length=255)
    sku = String(required=True, max_length=50)
    price = Float(required=True, min_value=0.0)
    discounted_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)


@storefront.command(part_of="Product")
class AddVariant:
    product_id = Identifier(required=True)
    sku = String(required=True, max_length=50)
    size = String(max_length=50)
    color = String(max_length=50)
    price_diff = Float(default=0.0)
    stock = Integer(default=0, min_value=0)


@storefront.command(part_of="Product")
class ChangeProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)
    discounted_price = Float(min_value=0.0)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _load_active(repo, product_id):
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        product = None
    if product is None or product.is_deleted:
        raise ValidationError({"product_id": [f"Product {product_id} not found"]})
    return product


@storefront.command_handler(part_of=Product)
class CatalogHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            title=command.title,
            sku=command.sku,
            price=command.price,
            discounted_price=command.discounted_price,
            stock=command.stock or 0,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_active(repo, command.product_id)
        variant = product.add_variant(
            sku=command.sku,
            size=command.size,
            color=command.color,
            price_diff=command.price_diff,
            stock=command.stock or 0,
        )
        repo.add(product)
        return str(variant.id)

    @handle(ChangeProductPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_active(repo, command.product_id)
        product.change_price(command.price, command.discounted_price)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_active(repo, command.product_id)
        product.delete()
        repo.add(product)
