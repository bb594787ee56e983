"""Product aggregate (CQRS) — sellable catalog item with optional variants.

Stock is held on the product (or on the selected variant) and is only ever
changed through the inventory ledger. Products are never hard-deleted: the
``is_deleted`` flag hides them from every catalog query.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String

from storefront.catalog.events import (
    ProductAdded,
    ProductDeleted,
    ProductPriceChanged,
    StockReleased,
    StockReplenished,
    StockReserved,
    VariantAdded,
)
from storefront.domain import storefront


@storefront.entity(part_of="Product")
class Variant:
    sku = String(required=True, max_length=50)
    size = String(max_length=50)
    color = String(max_length=50)
    price_diff = Float(default=0.0)
    stock = Integer(default=0, min_value=0)


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    sku = String(required=True, max_length=50, unique=True)
    price = Float(required=True, min_value=0.0)
    discounted_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)
    variants = HasMany(Variant)
    is_deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_must_never_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        for variant in self.variants or []:
            if variant.stock is not None and variant.stock < 0:
                raise ValidationError({"stock": [f"Stock cannot be negative for variant {variant.sku}"]})

    @invariant.post
    def discounted_price_must_not_exceed_price(self):
        if self.discounted_price is not None and self.price is not None and self.discounted_price > self.price:
            raise ValidationError({"discounted_price": ["Discounted price cannot exceed the list price"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, title, sku, price, discounted_price=None, stock=0):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            sku=sku,
            price=price,
            discounted_price=discounted_price,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                sku=sku,
                title=title,
                price=price,
                stock=stock,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Catalog maintenance
    # -------------------------------------------------------------------
    def add_variant(self, sku, size=None, color=None, price_diff=0.0, stock=0):
        if self.is_deleted:
            raise ValidationError({"product_id": ["Cannot add variants to a deleted product"]})
        if any(v.sku == sku for v in self.variants):
            raise ValidationError({"sku": [f"Variant with SKU {sku} already exists"]})

        variant = Variant(sku=sku, size=size, color=color, price_diff=price_diff or 0.0, stock=stock)
        self.add_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=str(self.id),
                variant_id=str(variant.id),
                sku=sku,
                price_diff=variant.price_diff,
                stock=stock,
            )
        )
        return variant

    def change_price(self, price, discounted_price=None):
        with atomic_change(self):
            self.price = price
            self.discounted_price = discounted_price
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                price=price,
                discounted_price=discounted_price,
            )
        )

    def delete(self):
        if self.is_deleted:
            raise ValidationError({"product_id": ["Product is already deleted"]})
        self.is_deleted = True
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeleted(product_id=str(self.id)))

    def variant(self, variant_id):
        """Return the variant with ``variant_id`` or None."""
        return next((v for v in self.variants if str(v.id) == str(variant_id)), None)

    # -------------------------------------------------------------------
    # Stock primitives, called by storefront.inventory.ledger only
    # -------------------------------------------------------------------
    def available(self, variant_id=None):
        if variant_id:
            return self._stock_holder(variant_id).stock or 0
        return self.stock or 0

    def take_stock(self, quantity, variant_id=None):
        holder = self._stock_holder(variant_id)
        available = holder.stock or 0
        if quantity > available:
            raise ValidationError({"stock": [f"Insufficient stock for product: {self.title}"]})

        holder.stock = available - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReserved(
                product_id=str(self.id),
                variant_id=str(variant_id) if variant_id else None,
                quantity=quantity,
                remaining=holder.stock,
            )
        )

    def return_stock(self, quantity, variant_id=None):
        holder = self._stock_holder(variant_id)
        holder.stock = (holder.stock or 0) + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReleased(
                product_id=str(self.id),
                variant_id=str(variant_id) if variant_id else None,
                quantity=quantity,
                remaining=holder.stock,
            )
        )

    def add_stock(self, quantity, variant_id=None):
        holder = self._stock_holder(variant_id)
        holder.stock = (holder.stock or 0) + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReplenished(
                product_id=str(self.id),
                variant_id=str(variant_id) if variant_id else None,
                quantity=quantity,
                remaining=holder.stock,
            )
        )

    def _stock_holder(self, variant_id):
        if not variant_id:
            return self
        variant = self.variant(variant_id)
        if variant is None:
            raise ValidationError({"variant_id": [f"Variant {variant_id} does not belong to product {self.title}"]})
        return variant
