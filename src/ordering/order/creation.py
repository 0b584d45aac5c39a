"""Order placement — commands and handler.

Placing an order is all-or-nothing: every line is validated, then stock is
committed for every product through the inventory ledger, then the order is
stored. The handler runs in one unit of work, so any failure leaves stock,
the order table, and the cart exactly as they were.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.management import cart_for
from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger
from ordering.order.order import Order, PaymentMethod, ShippingAddress
from ordering.utils.settings import setting

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, size, color}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=20)
    items_price = Float(min_value=0.0)
    tax_price = Float(min_value=0.0, default=0.0)
    shipping_price = Float(min_value=0.0, default=0.0)
    total_price = Float(min_value=0.0)
    notes = Text()


@ordering.command(part_of="Order")
class CheckoutCart:
    """Place an order from everything in the customer's cart, then empty it."""

    customer_id = Identifier(required=True)
    shipping_address = Text(required=True)
    payment_method = String(required=True, max_length=20)
    tax_price = Float(min_value=0.0, default=0.0)
    shipping_price = Float(min_value=0.0, default=0.0)
    notes = Text()


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


def _validate_lines(lines):
    if not lines:
        raise ValidationError({"items": ["No order items"]})

    for line in lines:
        if not line.get("product_id"):
            raise ValidationError({"items": ["Every item needs a product"]})
        quantity = line.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"items": ["Quantity must be at least 1"]})
        if not line.get("size"):
            raise ValidationError({"items": ["Size is required for every item"]})


def _address(data):
    address = {key: data.get(key) for key in ("street", "city", "state", "zip_code", "country")}
    address["country"] = address["country"] or setting("DEFAULT_COUNTRY")
    ShippingAddress(**address)  # Raises ValidationError for incomplete addresses
    return address


def _validate_payment_method(payment_method):
    if payment_method not in {m.value for m in PaymentMethod}:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError({"payment_method": [f"Payment method must be one of: {allowed}"]})


def _place_order(customer_id, lines, shipping_address, payment_method, pricing, notes=None) -> Order:
    """Commit stock for ``lines`` and store a new order. Must run inside a unit of work."""
    _validate_lines(lines)
    _validate_payment_method(payment_method)
    address = _address(shipping_address or {})

    products = InventoryLedger().commit_all((line["product_id"], line["quantity"]) for line in lines)

    items_data = []
    for line in lines:
        product = products[str(line["product_id"])]
        items_data.append(
            {
                "product_id": str(product.id),
                "name": product.name,
                "quantity": line["quantity"],
                "size": line["size"],
                "color": line.get("color"),
                "price": product.price,
                "image": product.image,
            }
        )

    items_price = pricing.get("items_price")
    if items_price is None:
        items_price = round(sum(i["price"] * i["quantity"] for i in items_data), 2)
    tax_price = pricing.get("tax_price") or 0.0
    shipping_price = pricing.get("shipping_price") or 0.0
    total_price = pricing.get("total_price")
    if total_price is None:
        total_price = round(items_price + tax_price + shipping_price, 2)

    order = Order.place(
        customer_id=customer_id,
        items_data=items_data,
        shipping_address=address,
        payment_method=payment_method,
        pricing={
            "items_price": items_price,
            "tax_price": tax_price,
            "shipping_price": shipping_price,
            "total_price": total_price,
        },
        notes=notes,
    )
    current_domain.repository_for(Order).add(order)

    logger.info(
        "order_placed",
        order_id=str(order.id),
        customer_id=str(customer_id),
        items=len(items_data),
        total_price=total_price,
    )
    return order


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = _place_order(
            customer_id=command.customer_id,
            lines=_loads(command.items) or [],
            shipping_address=_loads(command.shipping_address),
            payment_method=command.payment_method,
            pricing={
                "items_price": command.items_price,
                "tax_price": command.tax_price,
                "shipping_price": command.shipping_price,
                "total_price": command.total_price,
            },
            notes=command.notes,
        )
        return str(order.id)

    @handle(CheckoutCart)
    def checkout_cart(self, command):
        cart = cart_for(command.customer_id, create=False)
        if not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        lines = [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "size": item.size,
                "color": item.color,
            }
            for item in cart.items
        ]
        order = _place_order(
            customer_id=command.customer_id,
            lines=lines,
            shipping_address=_loads(command.shipping_address),
            payment_method=command.payment_method,
            pricing={
                "tax_price": command.tax_price,
                "shipping_price": command.shipping_price,
            },
            notes=command.notes,
        )

        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(order.id)
