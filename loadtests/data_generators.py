"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the field names expected by the
API's Pydantic request schemas.
"""

import random
import uuid
from datetime import UTC, datetime, timedelta

from faker import Faker

fake = Faker()


def customer_headers() -> dict:
    """Identity headers for a fresh simulated customer."""
    return {"X-Customer-Id": f"cust-lt-{uuid.uuid4().hex[:10]}", "X-Customer-Email": fake.email()}


def product_data(stock: int | None = None) -> dict:
    """Generate an AddProductRequest payload with a unique SKU."""
    price = round(random.uniform(5, 250), 2)
    return {
        "title": fake.catch_phrase()[:255],
        "sku": f"LT-{uuid.uuid4().hex[:10].upper()}",
        "price": price,
        "discounted_price": round(price * 0.9, 2) if random.random() < 0.3 else None,
        "stock": stock if stock is not None else random.randint(50, 500),
    }


def shipping_address() -> dict:
    return {
        "full_name": fake.name()[:255],
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode()[:20],
        "country": "US",
    }


def coupon_data(code: str, usage_limit: int | None = None) -> dict:
    return {
        "code": code,
        "discount": random.choice([5.0, 10.0, 15.0]),
        "is_flat": False,
        "expiry_date": (datetime.now(UTC) + timedelta(days=7)).isoformat(),
        "usage_limit": usage_limit,
        "min_total": 0.0,
    }


def checkout_urls() -> dict:
    return {"success_url": "https://shop.example.com/thanks", "cancel_url": "https://shop.example.com/cart"}
