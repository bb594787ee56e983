"""Stock contention: many shoppers racing for a few units of one product.

The run passes when the number of accepted orders never exceeds the stock
that was put on sale. Sold-out rejections are expected and counted as
successes.
"""

import threading

import requests
from locust import HttpUser, between, events, task

from loadtests.data_generators import customer_headers, product_data
from loadtests.helpers.response import extract_error_detail, is_sold_out

UNITS_ON_SALE = 25

_lock = threading.Lock()
_hot_product = {"id": None}
_accepted = {"orders": 0}


@events.test_start.add_listener
def create_hot_product(environment, **_kwargs):
    if environment.host is None:
        return
    response = requests.post(f"{environment.host}/products", json=product_data(stock=UNITS_ON_SALE), timeout=10)
    response.raise_for_status()
    _hot_product["id"] = response.json()["product_id"]
    _accepted["orders"] = 0


def report_contention(environment):
    if _hot_product["id"] is None:
        return
    response = requests.get(f"{environment.host}/products/{_hot_product['id']}", timeout=10)
    remaining = response.json().get("stock") if response.ok else None
    print(f"[LOADTEST] Hot product: {UNITS_ON_SALE} on sale, {_accepted['orders']} sold, {remaining} left")
    if _accepted["orders"] > UNITS_ON_SALE or (remaining is not None and remaining < 0):
        print("[LOADTEST] OVERSOLD: more units were sold than were on sale")
        environment.process_exit_code = 1


class StockContentionUser(HttpUser):
    wait_time = between(0.1, 0.5)

    @task
    def buy_one(self):
        if _hot_product["id"] is None:
            return
        with self.client.post(
            "/orders",
            json={"items": [{"product_id": _hot_product["id"], "quantity": 1}]},
            headers=customer_headers(),
            catch_response=True,
            name="POST /orders (hot product)",
        ) as resp:
            if resp.status_code == 201:
                with _lock:
                    _accepted["orders"] += 1
            elif is_sold_out(resp):
                resp.success()
            else:
                resp.failure(f"Order failed: {resp.status_code} — {extract_error_detail(resp)}")
