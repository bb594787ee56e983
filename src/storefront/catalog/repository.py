"""Product queries.

Every catalog read used by the storefront goes through these methods so that
soft-deleted products are filtered out in one place.
"""

from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def get_active(self, product_id) -> Product | None:
        """Return the product unless it is missing or soft-deleted."""
        return self._dao.query.filter(id=str(product_id), is_deleted=False).all().first

    def find_active(self, product_ids) -> list[Product]:
        ids = list({str(pid) for pid in product_ids})
        if not ids:
            return []
        return self._dao.query.filter(id__in=ids, is_deleted=False).all().items

    def list_active(self) -> list[Product]:
        return self._dao.query.filter(is_deleted=False).order_by("title").all().items


def get_product(product_id) -> Product | None:
    return current_domain.repository_for(Product).get_active(product_id)


def get_variant(product: Product, variant_id):
    return product.variant(variant_id)
