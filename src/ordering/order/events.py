"""Domain events for the Order aggregate.

All events are versioned, immutable facts. Item and address payloads are
carried as JSON so that consumers see exactly what was recorded at checkout.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was placed and its stock committed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item snapshots
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True)
    items_price = Float(required=True)
    tax_price = Float(required=True)
    shipping_price = Float(required=True)
    total_price = Float(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id = Identifier(required=True)
    receipt_id = String(required=True)
    receipt_status = String()
    email_address = String()
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved to another fulfillment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    tracking_number = String()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled and its stock is to be released."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = String(required=True)
    items = Text(required=True)  # JSON: [{product_id, quantity}]
    cancelled_at = DateTime(required=True)
