"""Domain events for the Cart aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartCreated:
    """A customer's cart was created on first access."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A selection was added to the cart, or merged into an existing line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String()
    color = String()
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    price = Float(required=True)
    merged = Boolean(default=False)


@ordering.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """All items were removed from the cart (explicitly or at checkout)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items_removed = Integer(required=True)
    cleared_at = DateTime(required=True)
