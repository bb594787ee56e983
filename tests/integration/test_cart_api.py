"""Integration tests for cart endpoints and cart checkout."""

CUSTOMER = {"X-Customer-Id": "cust-api-001"}


def _add(client, product_id, quantity=1):
    return client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=CUSTOMER)


class TestCartEndpoints:
    def test_get_creates_empty_cart(self, client):
        response = client.get("/cart", headers=CUSTOMER)

        assert response.status_code == 200
        data = response.json()
        assert data["cart_id"] is not None
        assert data["items"] == []
        assert data["total"] == 0.0

    def test_add_and_view(self, client, product_id):
        assert _add(client, product_id, quantity=2).status_code == 201

        data = client.get("/cart", headers=CUSTOMER).json()
        assert data["items"][0]["quantity"] == 2
        assert data["items"][0]["available"] is True
        assert data["total"] == 99.98

    def test_add_above_stock_is_400(self, client, product_id):
        response = _add(client, product_id, quantity=11)
        assert response.status_code == 400

    def test_update_and_remove(self, client, product_id):
        item_id = _add(client, product_id).json()["item_id"]

        assert client.put(f"/cart/items/{item_id}", json={"quantity": 3}, headers=CUSTOMER).status_code == 200
        assert client.get("/cart", headers=CUSTOMER).json()["items"][0]["quantity"] == 3

        assert client.delete(f"/cart/items/{item_id}", headers=CUSTOMER).status_code == 200
        assert client.get("/cart", headers=CUSTOMER).json()["items"] == []

    def test_clear(self, client, product_id):
        _add(client, product_id)

        assert client.delete("/cart", headers=CUSTOMER).status_code == 200
        assert client.get("/cart", headers=CUSTOMER).json()["items"] == []

    def test_requires_identity(self, client):
        assert client.get("/cart").status_code == 401


class TestCartCheckout:
    def test_places_order_and_clears_cart(self, client, product_id):
        _add(client, product_id, quantity=2)

        response = client.post("/cart/checkout", json={}, headers=CUSTOMER)

        assert response.status_code == 201
        order_id = response.json()["order_id"]
        assert client.get(f"/orders/{order_id}", headers=CUSTOMER).json()["total_amount"] == 99.98
        assert client.get(f"/products/{product_id}").json()["stock"] == 8
        assert client.get("/cart", headers=CUSTOMER).json()["items"] == []

    def test_empty_cart_is_400(self, client):
        response = client.post("/cart/checkout", json={}, headers=CUSTOMER)
        assert response.status_code == 400
