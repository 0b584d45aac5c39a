"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. JSON uses camelCase; snake_case field names are
accepted on input as well.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Envelope carried by every successful response."""

    success: bool = True
    message: str | None = None
    data: T | None = None


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(CamelModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str | None = None


class PricingSchema(CamelModel):
    items_price: float | None = Field(default=None, ge=0)
    tax_price: float = Field(default=0.0, ge=0)
    shipping_price: float = Field(default=0.0, ge=0)
    total_price: float | None = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    product_id: str
    quantity: int = 1
    size: str | None = None
    color: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "prod-001", "quantity": 2, "size": "M", "color": "Red"}]},
    )


class UpdateCartItemRequest(CamelModel):
    quantity: int


class CheckoutRequest(CamelModel):
    shipping_address: AddressSchema
    payment_method: str
    tax_price: float = Field(default=0.0, ge=0)
    shipping_price: float = Field(default=0.0, ge=0)
    notes: str | None = None


class CartItemResponse(CamelModel):
    id: str
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None
    price: float
    line_total: float
    added_at: datetime | None = None


class CartResponse(CamelModel):
    id: str
    customer_id: str
    items: list[CartItemResponse]
    total_quantity: int
    subtotal: float
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, cart) -> "CartResponse":
        return cls(
            id=str(cart.id),
            customer_id=str(cart.customer_id),
            items=[
                CartItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    size=item.size,
                    color=item.color,
                    price=item.price,
                    line_total=item.line_total,
                    added_at=item.added_at,
                )
                for item in cart.items
            ],
            total_quantity=cart.total_quantity,
            subtotal=cart.subtotal,
            updated_at=cart.updated_at,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineRequest(CamelModel):
    product_id: str
    quantity: int
    size: str
    color: str | None = None


class CreateOrderRequest(CamelModel):
    items: list[OrderLineRequest]
    shipping_address: AddressSchema
    payment_method: str
    pricing: PricingSchema = Field(default_factory=PricingSchema)
    notes: str | None = None


class ReceiptSchema(CamelModel):
    id: str
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


class PayOrderRequest(CamelModel):
    receipt: ReceiptSchema


class UpdateOrderStatusRequest(CamelModel):
    status: str
    tracking_number: str | None = None


class OrderItemResponse(CamelModel):
    id: str
    product_id: str
    name: str
    quantity: int
    size: str
    color: str | None = None
    price: float
    image: str | None = None


class OrderResponse(CamelModel):
    id: str
    customer_id: str
    items: list[OrderItemResponse]
    shipping_address: AddressSchema
    payment_method: str
    payment_result: ReceiptSchema | None = None
    pricing: PricingSchema
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    status: str
    tracking_number: str | None = None
    notes: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, order) -> "OrderResponse":
        address = order.shipping_address
        receipt = order.payment_result
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    quantity=item.quantity,
                    size=item.size,
                    color=item.color,
                    price=item.price,
                    image=item.image,
                )
                for item in order.items
            ],
            shipping_address=AddressSchema(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            payment_method=order.payment_method,
            payment_result=(
                ReceiptSchema(
                    id=receipt.receipt_id,
                    status=receipt.status,
                    update_time=receipt.update_time,
                    email_address=receipt.email_address,
                )
                if receipt
                else None
            ),
            pricing=PricingSchema(
                items_price=order.pricing.items_price,
                tax_price=order.pricing.tax_price,
                shipping_price=order.pricing.shipping_price,
                total_price=order.pricing.total_price,
            ),
            is_paid=bool(order.is_paid),
            paid_at=order.paid_at,
            is_delivered=bool(order.is_delivered),
            delivered_at=order.delivered_at,
            status=order.status,
            tracking_number=order.tracking_number,
            notes=order.notes,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderPageResponse(CamelModel):
    orders: list[OrderResponse]
    count: int
    total: int
    page: int
    pages: int


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------
class RegisterProductRequest(CamelModel):
    product_id: str | None = None
    name: str
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    image: str | None = None
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)


class ReceiveStockRequest(CamelModel):
    quantity: int = Field(ge=1)


class ProductResponse(CamelModel):
    id: str
    name: str
    price: float
    stock: int
    image: str | None = None
    sizes: list[str]
    colors: list[str]
    is_active: bool

    @classmethod
    def from_domain(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price,
            stock=product.stock,
            image=product.image,
            sizes=product.size_list,
            colors=product.color_list,
            is_active=bool(product.is_active),
        )
