"""Repository for the Order aggregate — customer history and admin listing."""

import math

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id, limit=100) -> list[Order]:
        """A customer's orders, newest first."""
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .limit(limit)
            .all()
            .items
        )

    def page(self, page=1, limit=10) -> dict:
        """One page of all orders, newest first, with paging metadata."""
        page = max(int(page), 1)
        limit = max(int(limit), 1)

        result = self._dao.query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return {
            "orders": result.items,
            "count": len(result.items),
            "total": result.total,
            "page": page,
            "pages": math.ceil(result.total / limit) if result.total else 0,
        }
