"""FastAPI endpoints for catalog administration."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError

from storefront.api.schemas import (
    AddProductRequest,
    AddVariantRequest,
    ChangePriceRequest,
    ProductIdResponse,
    ProductResponse,
    ReplenishStockRequest,
    StatusResponse,
    StockResponse,
    VariantIdResponse,
    VariantResponse,
)
from storefront.catalog.management import AddProduct, AddVariant, ChangeProductPrice, DeleteProduct
from storefront.catalog.pricing import price_of
from storefront.catalog.repository import get_product
from storefront.inventory.replenishment import ReplenishStock
from storefront.shared.concurrency import dispatch

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        title=body.title,
        sku=body.sku,
        price=body.price,
        discounted_price=body.discounted_price,
        stock=body.stock,
    )
    result = dispatch(command)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_details(product_id: str) -> ProductResponse:
    product = get_product(product_id)
    if product is None:
        raise ObjectNotFoundError(f"Product {product_id} not found")
    return ProductResponse(
        product_id=str(product.id),
        title=product.title,
        sku=product.sku,
        price=product.price,
        discounted_price=product.discounted_price,
        unit_price=price_of(product),
        stock=product.stock,
        variants=[
            VariantResponse(
                variant_id=str(v.id),
                sku=v.sku,
                size=v.size,
                color=v.color,
                price_diff=v.price_diff or 0.0,
                stock=v.stock,
            )
            for v in product.variants
        ],
    )


@product_router.post("/{product_id}/variants", status_code=201, response_model=VariantIdResponse)
async def add_variant(product_id: str, body: AddVariantRequest) -> VariantIdResponse:
    command = AddVariant(
        product_id=product_id,
        sku=body.sku,
        size=body.size,
        color=body.color,
        price_diff=body.price_diff,
        stock=body.stock,
    )
    result = dispatch(command)
    return VariantIdResponse(variant_id=result)


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    command = ChangeProductPrice(product_id=product_id, price=body.price, discounted_price=body.discounted_price)
    dispatch(command)
    return StatusResponse()


@product_router.post("/{product_id}/stock", response_model=StockResponse)
async def replenish_stock(product_id: str, body: ReplenishStockRequest) -> StockResponse:
    command = ReplenishStock(product_id=product_id, variant_id=body.variant_id, quantity=body.quantity)
    available = dispatch(command)
    return StockResponse(available=available)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    dispatch(DeleteProduct(product_id=product_id))
    return StatusResponse(status="deleted")
