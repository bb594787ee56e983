"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared between users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from cart to payment."""

    customer_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    session_id: str | None = None
