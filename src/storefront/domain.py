"""Storefront bounded context — catalog, cart, checkout, payments and refunds.

A single domain so that one Unit of Work can span products, coupons and
orders while an order is being committed.
"""

from protean.domain import Domain

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
