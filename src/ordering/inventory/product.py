"""Product aggregate — the stock-bearing resource owned by the inventory ledger.

Catalog attributes (name, price, image, sizes, colors) are synchronized from
upstream; the ordering core only ever mutates ``stock``. Every stock
mutation re-validates against the current count so the counter can never go
negative, and each change is recorded as a domain event.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from ordering.domain import ordering
from ordering.exceptions import InsufficientStockError
from ordering.inventory.events import (
    ProductRegistered,
    StockCommitted,
    StockReceived,
    StockReleased,
)


class Size(Enum):
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


@ordering.aggregate
class Product:
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    stock = Integer(min_value=0, default=0)
    image = String(max_length=500)
    sizes = Text()  # JSON: list of Size values
    colors = Text()  # JSON: list of color names
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_must_not_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, price, stock=0, image=None, sizes=None, colors=None, product_id=None):
        sizes = list(sizes or [])
        unknown = [s for s in sizes if s not in {size.value for size in Size}]
        if unknown:
            raise ValidationError({"sizes": [f"Unknown sizes: {', '.join(unknown)}"]})

        now = datetime.now(UTC)
        attributes = dict(
            name=name,
            price=price,
            stock=stock,
            image=image,
            sizes=json.dumps(sizes),
            colors=json.dumps(list(colors or [])),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        if product_id:
            attributes["id"] = product_id

        product = cls(**attributes)
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                registered_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def size_list(self):
        return json.loads(self.sizes) if self.sizes else []

    @property
    def color_list(self):
        return json.loads(self.colors) if self.colors else []

    def ensure_available(self, quantity):
        """Raise ``InsufficientStockError`` unless ``quantity`` units are in stock."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if self.stock < quantity:
            raise InsufficientStockError(self.id, self.stock, quantity)

    # -------------------------------------------------------------------
    # Stock mutations
    # -------------------------------------------------------------------
    def commit(self, quantity):
        """Take ``quantity`` units out of stock for a placed order."""
        self.ensure_available(quantity)

        previous = self.stock
        self.stock = previous - quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockCommitted(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                committed_at=now,
            )
        )

    def release(self, quantity):
        """Return ``quantity`` units to stock after a cancellation."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.stock
        self.stock = previous + quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                released_at=now,
            )
        )

    def receive(self, quantity):
        """Add newly received units (catalog restock)."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.stock
        self.stock = previous + quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockReceived(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                received_at=now,
            )
        )
