"""Inventory ledger — the single owner of product stock.

Cart handlers use ``reserve`` as an advisory check; nothing is held. Order
placement uses ``commit_all`` and cancellation uses ``release_all``. All
writes go through the Product repository inside the caller's unit of work,
so a failure anywhere in a command handler rolls every stock change back,
and the aggregate version check turns a concurrent write on the same
product into an ``ExpectedVersionError`` instead of a lost update.
"""

from collections import OrderedDict

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.inventory.product import Product

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(self):
        self.repository = current_domain.repository_for(Product)

    def product(self, product_id) -> Product:
        """Catalog lookup. Raises ``ObjectNotFoundError`` for unknown products."""
        return self.repository.get(product_id)

    def reserve(self, product_id, quantity) -> Product:
        """Check that ``quantity`` units are available. No side effects."""
        product = self.product(product_id)
        product.ensure_available(quantity)
        return product

    def commit_decrement(self, product_id, quantity) -> Product:
        product = self.product(product_id)
        product.commit(quantity)
        self.repository.add(product)

        logger.info(
            "stock_committed",
            product_id=str(product_id),
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    def release(self, product_id, quantity) -> Product | None:
        """Put ``quantity`` units back. A product that vanished is skipped."""
        try:
            product = self.product(product_id)
        except ObjectNotFoundError:
            logger.warning("stock_release_skipped", product_id=str(product_id), quantity=quantity)
            return None

        product.release(quantity)
        self.repository.add(product)

        logger.info(
            "stock_released",
            product_id=str(product_id),
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    def commit_all(self, lines) -> dict:
        """Decrement stock for every ``(product_id, quantity)`` line, or none.

        Lines for the same product are summed first, then every product is
        validated before the first decrement is applied.
        """
        totals = self._totals(lines)
        products = {product_id: self.reserve(product_id, quantity) for product_id, quantity in totals.items()}

        for product_id, quantity in totals.items():
            product = products[product_id]
            product.commit(quantity)
            self.repository.add(product)

        logger.info("stock_committed_for_order", lines=len(totals), units=sum(totals.values()))
        return products

    def release_all(self, lines) -> None:
        for product_id, quantity in self._totals(lines).items():
            self.release(product_id, quantity)

    @staticmethod
    def _totals(lines):
        totals = OrderedDict()
        for product_id, quantity in lines:
            key = str(product_id)
            totals[key] = totals.get(key, 0) + quantity
        return totals
