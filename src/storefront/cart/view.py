"""Read-side view of a customer's cart with live prices."""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalog.pricing import line_title, price_of
from storefront.catalog.product import Product
from storefront.shared.money import as_decimal, to_cents


def describe_cart(customer_id) -> dict:
    """Return the cart lines priced with the current catalog and the cart total.

    Lines whose product was deleted stay in the cart but are flagged as
    unavailable and excluded from the total.
    """
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    if cart is None:
        return {"cart_id": None, "customer_id": str(customer_id), "items": [], "total": 0.0}

    products = {
        str(p.id): p for p in current_domain.repository_for(Product).find_active(i.product_id for i in cart.items)
    }

    lines = []
    total = as_decimal(0)
    for item in cart.items:
        product = products.get(str(item.product_id))
        variant = product.variant(item.variant_id) if product and item.variant_id else None
        if product is None or (item.variant_id and variant is None):
            lines.append(
                {
                    "item_id": str(item.id),
                    "product_id": str(item.product_id),
                    "variant_id": str(item.variant_id) if item.variant_id else None,
                    "quantity": item.quantity,
                    "available": False,
                }
            )
            continue

        unit_price = price_of(product, variant)
        line_total = as_decimal(unit_price) * item.quantity
        total += line_total
        lines.append(
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "variant_id": str(item.variant_id) if item.variant_id else None,
                "title": line_title(product, variant),
                "quantity": item.quantity,
                "unit_price": unit_price,
                "line_total": to_cents(line_total),
                "available": True,
            }
        )

    return {"cart_id": str(cart.id), "customer_id": str(cart.customer_id), "items": lines, "total": to_cents(total)}
