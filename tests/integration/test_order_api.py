"""Integration tests for order endpoints."""

from protean import current_domain
from storefront.catalog.product import Product

CUSTOMER = {"X-Customer-Id": "cust-api-001"}


def _place(client, product_id, quantity=2, headers=CUSTOMER, **extra):
    return client.post(
        "/orders",
        json={"items": [{"product_id": product_id, "quantity": quantity}], **extra},
        headers=headers,
    )


class TestPlaceOrder:
    def test_created(self, client, product_id):
        response = _place(client, product_id)

        assert response.status_code == 201
        order_id = response.json()["order_id"]

        order = client.get(f"/orders/{order_id}", headers=CUSTOMER).json()
        assert order["status"] == "Pending"
        assert order["total_amount"] == 99.98
        assert order["items"][0]["title"] == "Canvas Tote"

    def test_with_shipping_address(self, client, product_id):
        address = {"street": "1 Main St", "city": "Springfield", "postal_code": "12345", "country": "US"}
        order_id = _place(client, product_id, shipping_address=address).json()["order_id"]

        order = client.get(f"/orders/{order_id}", headers=CUSTOMER).json()
        assert order["shipping_address"]["city"] == "Springfield"

    def test_insufficient_stock_is_400(self, client, product_id):
        response = _place(client, product_id, quantity=11)

        assert response.status_code == 400
        assert current_domain.repository_for(Product).get(product_id).stock == 10

    def test_unknown_coupon_is_400(self, client, product_id):
        response = _place(client, product_id, coupon_code="NOPE")
        assert response.status_code == 400

    def test_zero_quantity_is_422(self, client, product_id):
        response = _place(client, product_id, quantity=0)
        assert response.status_code == 422

    def test_missing_identity_is_401(self, client, product_id):
        response = _place(client, product_id, headers={})
        assert response.status_code == 401


class TestReadOrders:
    def test_list_only_own_orders(self, client, product_id):
        _place(client, product_id, quantity=1)
        _place(client, product_id, quantity=1, headers={"X-Customer-Id": "cust-api-002"})

        response = client.get("/orders", headers=CUSTOMER)

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_other_customers_order_is_404(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]

        response = client.get(f"/orders/{order_id}", headers={"X-Customer-Id": "cust-api-002"})
        assert response.status_code == 404


class TestOrderLifecycle:
    def test_cancel_restocks(self, client, product_id):
        order_id = _place(client, product_id, quantity=3).json()["order_id"]

        response = client.post(f"/orders/{order_id}/cancel", headers=CUSTOMER)

        assert response.status_code == 200
        assert client.get(f"/orders/{order_id}", headers=CUSTOMER).json()["status"] == "Cancelled"
        assert client.get(f"/products/{product_id}").json()["stock"] == 10

    def test_staff_status_update(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]

        response = client.patch(f"/orders/{order_id}/status", json={"status": "Processing"})

        assert response.status_code == 200
        assert client.get(f"/orders/{order_id}", headers=CUSTOMER).json()["status"] == "Processing"

    def test_illegal_transition_is_400(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]

        response = client.patch(f"/orders/{order_id}/status", json={"status": "Delivered"})
        assert response.status_code == 400


class TestRefundEndpoints:
    def _delivered_order(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]
        for status in ("Processing", "Shipped", "Delivered"):
            client.patch(f"/orders/{order_id}/status", json={"status": status})
        return order_id

    def test_request_and_review(self, client, product_id):
        order_id = self._delivered_order(client, product_id)

        response = client.post(f"/orders/{order_id}/refund", json={"reason": "Too small"}, headers=CUSTOMER)
        assert response.status_code == 201
        refund_id = response.json()["refund_id"]

        refund = client.get(f"/orders/{order_id}/refund", headers=CUSTOMER).json()
        assert refund["status"] == "Pending"
        assert refund["amount"] == 99.98

        assert client.patch(f"/refunds/{refund_id}/status", json={"status": "Approved"}).status_code == 200
        assert client.get("/refunds").json()[0]["status"] == "Approved"

    def test_refund_for_pending_order_is_400(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]

        response = client.post(f"/orders/{order_id}/refund", json={}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_no_refund_yet(self, client, product_id):
        order_id = _place(client, product_id).json()["order_id"]

        response = client.get(f"/orders/{order_id}/refund", headers=CUSTOMER)
        assert response.status_code == 200
        assert response.json() is None
