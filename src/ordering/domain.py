"""Ordering bounded context — Shopping Cart, Orders and the Inventory Ledger.

Carts validate against product stock, orders commit stock decrements at
checkout, and cancellations release them. Inventory lives in the same domain
so that a checkout commits or rolls back as a single unit of work.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
