"""Stock replenishment by staff — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger


@storefront.command(part_of="Product")
class ReplenishStock:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class ReplenishStockHandler:
    @handle(ReplenishStock)
    def replenish_stock(self, command):
        product = current_domain.repository_for(Product).get_active(command.product_id)
        if product is None:
            raise ValidationError({"product_id": [f"Product {command.product_id} not found"]})

        ledger = InventoryLedger([product])
        ledger.replenish(command.product_id, command.quantity, variant_id=command.variant_id)
        ledger.flush()
        return product.available(command.variant_id)
