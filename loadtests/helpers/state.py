"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CartState:
    """Tracks state for a single customer's cart."""

    headers: dict = field(default_factory=dict)
    product_ids: list[str] = field(default_factory=list)
    item_ids: list[str] = field(default_factory=list)


@dataclass
class OrderState:
    """Tracks state for a single order lifecycle."""

    headers: dict = field(default_factory=dict)
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    current_status: str = "Processing"
    stock_before: dict[str, int] = field(default_factory=dict)
