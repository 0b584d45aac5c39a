"""Order aggregate — the record of a completed checkout.

An order is a frozen snapshot: item names, prices and images are copied from
the catalog when the order is placed and never follow later catalog changes.
After placement the order only changes through payment, the status state
machine (``ordering.order.status``), or cancellation.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.exceptions import InvalidTransitionError
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
)
from ordering.order.status import (
    INITIAL_STATUS,
    OrderStatus,
    assert_can_transition,
    can_cancel,
)


class PaymentMethod(Enum):
    COD = "COD"
    CARD = "Card"
    UPI = "UPI"
    NET_BANKING = "NetBanking"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="India")


@ordering.value_object(part_of="Order")
class PaymentResult:
    """Opaque receipt handed back by the payment provider."""

    receipt_id = String(required=True, max_length=255)
    status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Prices locked at checkout."""

    items_price = Float(default=0.0, min_value=0.0)
    tax_price = Float(default=0.0, min_value=0.0)
    shipping_price = Float(default=0.0, min_value=0.0)
    total_price = Float(default=0.0, min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    size = String(required=True, max_length=10)
    color = String(max_length=50)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_result = ValueObject(PaymentResult)
    pricing = ValueObject(OrderPricing)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    status = String(choices=OrderStatus, default=INITIAL_STATUS.value)
    tracking_number = String(max_length=255)
    notes = Text()
    cancelled_by = String(max_length=50)
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["No order items"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, items_data, shipping_address, payment_method, pricing, notes=None):
        """Create an order in its initial status.

        Args:
            customer_id: The customer placing the order.
            items_data: List of snapshot dicts with product_id, name, quantity,
                        size, color, price, image.
            shipping_address: Dict with street, city, state, zip_code, country.
            payment_method: One of ``PaymentMethod`` values.
            pricing: Dict with items_price, tax_price, shipping_price, total_price.
        """
        if not items_data:
            raise ValidationError({"items": ["No order items"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**pricing),
            status=INITIAL_STATUS.value,
            is_paid=False,
            is_delivered=False,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps([order._snapshot(item) for item in order.items]),
                shipping_address=json.dumps(shipping_address),
                payment_method=payment_method,
                items_price=order.pricing.items_price,
                tax_price=order.pricing.tax_price,
                shipping_price=order.pricing.shipping_price,
                total_price=order.pricing.total_price,
                item_count=len(order.items),
                placed_at=now,
            )
        )
        return order

    @staticmethod
    def _snapshot(item):
        return {
            "product_id": str(item.product_id),
            "name": item.name,
            "quantity": item.quantity,
            "size": item.size,
            "color": item.color,
            "price": item.price,
            "image": item.image,
        }

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    def stock_lines(self):
        """``(product_id, quantity)`` pairs recorded on this order."""
        return [(str(item.product_id), item.quantity) for item in self.items]

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def mark_paid(self, receipt_id, status=None, update_time=None, email_address=None):
        """Record payment. Payment is independent of fulfillment status."""
        now = datetime.now(UTC)
        self.payment_result = PaymentResult(
            receipt_id=receipt_id,
            status=status,
            update_time=update_time,
            email_address=email_address,
        )
        self.is_paid = True
        self.paid_at = now
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                receipt_id=receipt_id,
                receipt_status=status,
                email_address=email_address,
                paid_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def update_status(self, new_status, tracking_number=None):
        """Move to ``new_status``. Cancellation must go through ``cancel``."""
        target = assert_can_transition(self.status, new_status)
        if target == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Use order cancellation to cancel an order"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if tracking_number:
            self.tracking_number = tracking_number
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                tracking_number=self.tracking_number,
                changed_at=now,
            )
        )

        if target == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
            self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by):
        """Cancel the order. The caller releases the stock in the same unit of work."""
        if not can_cancel(self.status):
            raise InvalidTransitionError(self.status, OrderStatus.CANCELLED.value)

        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous,
                cancelled_by=cancelled_by,
                items=json.dumps([{"product_id": p, "quantity": q} for p, q in self.stock_lines()]),
                cancelled_at=now,
            )
        )
