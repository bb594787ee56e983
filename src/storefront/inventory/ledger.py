"""Inventory ledger — the only code path that changes stock counters.

A ledger instance lives for one Unit of Work. It loads the products involved,
applies reservations, releases and replenishments to them in memory and hands
them back to the repository. Protean saves each product against the
``_version`` it was loaded with, so a product changed by another writer in the
meantime fails the surrounding command with ``ExpectedVersionError`` and
nothing of it is persisted.
"""

from collections import OrderedDict
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalog.product import Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    product_id: str
    quantity: int
    variant_id: str | None = None

    @property
    def key(self):
        return (str(self.product_id), str(self.variant_id) if self.variant_id else None)


class InventoryLedger:
    def __init__(self, products):
        self._repo = current_domain.repository_for(Product)
        self._products = {str(p.id): p for p in products}
        self._touched = OrderedDict()

    @classmethod
    def for_order_lines(cls, lines):
        """Load every active product referenced by ``lines``.

        Soft-deleted and unknown products are rejected together.
        """
        repo = current_domain.repository_for(Product)
        wanted = {str(line.product_id) for line in lines}
        products = repo.find_active(wanted)
        if len(products) != len(wanted):
            raise ValidationError({"items": ["One or more products in the order do not exist"]})

        ledger = cls(products)
        for line in lines:
            if line.variant_id and ledger.product(line.product_id).variant(line.variant_id) is None:
                raise ValidationError(
                    {"variant_id": [f"Variant {line.variant_id} does not belong to product {line.product_id}"]}
                )
        return ledger

    @classmethod
    def for_products(cls, product_ids):
        """Load products by id, soft-deleted ones included (used for restocking)."""
        repo = current_domain.repository_for(Product)
        products = []
        for product_id in {str(pid) for pid in product_ids}:
            try:
                products.append(repo.get(product_id))
            except ObjectNotFoundError:
                logger.warning("ledger_product_missing", product_id=product_id)
        return cls(products)

    def product(self, product_id) -> Product:
        return self._products[str(product_id)]

    def has_product(self, product_id) -> bool:
        return str(product_id) in self._products

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def ensure_available(self, lines) -> None:
        """Fail on the first line whose product cannot cover the requested quantity.

        Quantities are summed per product/variant so repeated lines are
        checked against the same counter.
        """
        requested = OrderedDict()
        for line in lines:
            requested[line.key] = requested.get(line.key, 0) + line.quantity

        for (product_id, variant_id), quantity in requested.items():
            product = self.product(product_id)
            available = product.available(variant_id)
            if quantity > available:
                logger.info(
                    "stock_insufficient",
                    product_id=product_id,
                    variant_id=variant_id,
                    requested=quantity,
                    available=available,
                )
                raise ValidationError({"stock": [f"Insufficient stock for product: {product.title}"]})

    def reserve(self, product_id, quantity, variant_id=None) -> None:
        product = self.product(product_id)
        product.take_stock(quantity, variant_id=variant_id)
        self._touched[str(product.id)] = product

    def release(self, product_id, quantity, variant_id=None) -> None:
        product = self.product(product_id)
        product.return_stock(quantity, variant_id=variant_id)
        self._touched[str(product.id)] = product

    def replenish(self, product_id, quantity, variant_id=None) -> None:
        if quantity <= 0:
            raise ValidationError({"quantity": ["Replenishment quantity must be positive"]})
        product = self.product(product_id)
        product.add_stock(quantity, variant_id=variant_id)
        self._touched[str(product.id)] = product

    def flush(self) -> None:
        """Hand every touched product to the repository; the Unit of Work commits them together."""
        for product in self._touched.values():
            self._repo.add(product)
        self._touched.clear()
