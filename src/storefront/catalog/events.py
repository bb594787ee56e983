"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String(required=True)
    title = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)


@storefront.event(part_of="Product")
class VariantAdded:
    """A size/color variant was attached to a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    sku = String(required=True)
    price_diff = Float()
    stock = Integer(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """The list or discounted price of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    price = Float(required=True)
    discounted_price = Float()


@storefront.event(part_of="Product")
class ProductDeleted:
    """A product was soft-deleted from the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Stock was taken for an order."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Stock reserved for an order was given back."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@storefront.event(part_of="Product")
class StockReplenished:
    """Stock was added by staff."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)
