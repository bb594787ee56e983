"""Pricing rules for catalog items.

Pure functions: the unit price computed here is copied onto the order line
at commitment time and never recomputed afterwards.
"""

from storefront.shared.money import as_decimal, to_cents


def price_of(product, variant=None) -> float:
    """Unit price: discounted price when set, else list price, plus the variant's difference."""
    base = product.discounted_price if product.discounted_price is not None else product.price
    unit = as_decimal(base)
    if variant is not None:
        unit += as_decimal(variant.price_diff)
    return to_cents(unit)


def line_title(product, variant=None) -> str:
    if variant is None:
        return product.title
    details = ", ".join(part for part in (variant.size, variant.color) if part)
    return f"{product.title} ({details})" if details else product.title


def line_sku(product, variant=None) -> str:
    if variant is not None and variant.sku:
        return variant.sku
    return product.sku
