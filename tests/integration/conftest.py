"""Fixtures for API tests: every router mounted on a bare app."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from storefront.api import (
    cart_router,
    coupon_router,
    order_router,
    payment_router,
    product_router,
    refund_router,
)



@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in (product_router, cart_router, order_router, coupon_router, refund_router, payment_router):
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def product_id(client):
    response = client.post(
        "/products",
        json={"title": "Canvas Tote", "sku": "TOTE-001", "price": 49.99, "stock": 10},
    )
    assert response.status_code == 201
    return response.json()["product_id"]
