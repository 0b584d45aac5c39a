"""Cart aggregate — one mutable selection of items per customer.

A cart is created lazily the first time a customer touches it and is never
deleted, only cleared. Its id is derived from the customer id, so two
concurrent first accesses collide on insert instead of opening two carts.

Each line is identified by ``(product, size, color)``; adding the same
selection twice merges into the existing line. Stock is not
checked here: the command handlers consult the inventory ledger before
calling into the aggregate.
"""

from datetime import UTC, datetime
from uuid import NAMESPACE_URL, uuid5

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from ordering.domain import ordering


def _key(product_id, size, color):
    return (str(product_id), size or None, color or None)


def cart_id_for(customer_id) -> str:
    """The fixed identity of a customer's cart."""
    return str(uuid5(NAMESPACE_URL, f"dressgallery:cart:{customer_id}"))


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=10)
    color = String(max_length=50)
    price = Float(required=True, min_value=0.0)  # Unit price captured when added
    added_at = DateTime()

    @property
    def key(self):
        return _key(self.product_id, self.size, self.color)

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


@ordering.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_selection(self):
        keys = [item.key for item in self.items]
        if len(keys) != len(set(keys)):
            raise ValidationError({"items": ["Cart cannot hold the same product, size and color twice"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        cart = cls(id=cart_id_for(customer_id), customer_id=customer_id, created_at=now, updated_at=now)
        cart.raise_(
            CartCreated(
                cart_id=str(cart.id),
                customer_id=str(customer_id),
                created_at=now,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id, size=None, color=None):
        """The line for a ``(product, size, color)`` selection, if any."""
        key = _key(product_id, size, color)
        return next((i for i in self.items if i.key == key), None)

    def get_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError("Item not found in cart")
        return item

    def quantity_in_cart(self, product_id, size=None, color=None):
        item = self.find_item(product_id, size, color)
        return item.quantity if item else 0

    @property
    def subtotal(self):
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @property
    def total_quantity(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, price, size=None, color=None):
        """Add a selection, merging into the existing line for the same key.

        Returns the line that now holds the selection.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.find_item(product_id, size, color)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                size=size or None,
                color=color or None,
                price=price,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_id=str(item.id),
                product_id=str(product_id),
                size=item.size,
                color=item.color,
                quantity=quantity,
                new_quantity=item.quantity,
                price=item.price,
                merged=existing is not None,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.get_item(item_id)
        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return item

    def remove_item(self, item_or_product_id):
        """Remove the line with this item id, or every line for this product id."""
        target = str(item_or_product_id)
        removed = [i for i in self.items if str(i.id) == target or str(i.product_id) == target]
        if not removed:
            raise ObjectNotFoundError("Item not found in cart")

        for item in removed:
            self.remove_items(item)
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    item_id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                )
            )

        self.updated_at = datetime.now(UTC)
        return removed

    def clear(self):
        """Empty the cart. Clearing an empty cart is a no-op."""
        items = list(self.items)
        for item in items:
            self.remove_items(item)

        now = datetime.now(UTC)
        self.updated_at = now

        if items:
            self.raise_(
                CartCleared(
                    cart_id=str(self.id),
                    customer_id=str(self.customer_id),
                    items_removed=len(items),
                    cleared_at=now,
                )
            )
        return len(items)
