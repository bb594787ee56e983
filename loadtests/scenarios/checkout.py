"""Shopper journey: browse, fill the cart, check out and start payment.

Each simulated shopper creates the products it buys so runs do not depend on
seeded data.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_urls, customer_headers, product_data, shipping_address
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Add Products -> Add to Cart -> View Cart -> Checkout -> Payment Session -> View Order."""

    def on_start(self):
        self.state = ShopperState()
        self.headers = customer_headers()
        self.state.customer_id = self.headers["X-Customer-Id"]

    @task
    def add_products(self):
        for _ in range(random.randint(1, 3)):
            with self.client.post(
                "/products", json=product_data(), catch_response=True, name="POST /products"
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                headers=self.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.item_ids.append(resp.json()["item_id"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/cart/checkout",
            json={"shipping_address": shipping_address()},
            headers=self.headers,
            catch_response=True,
            name="POST /cart/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def start_payment(self):
        with self.client.post(
            "/payments/checkout",
            json={"order_id": self.state.order_id, **checkout_urls()},
            headers=self.headers,
            catch_response=True,
            name="POST /payments/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.session_id = resp.json()["session_id"]
            else:
                resp.failure(f"Payment session failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_order(self):
        self.client.get(f"/orders/{self.state.order_id}", headers=self.headers, name="GET /orders/{id}")
        self.interrupt()


class ShopperUser(HttpUser):
    tasks = [CheckoutJourney]
    wait_time = between(1, 3)
