"""FastAPI routes for the Ordering domain — cart, orders and inventory."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from ordering.api.auth import Principal, current_principal, require_admin
from ordering.api.schemas import (
    AddToCartRequest,
    ApiResponse,
    CartResponse,
    CheckoutRequest,
    CreateOrderRequest,
    OrderPageResponse,
    OrderResponse,
    PayOrderRequest,
    ProductResponse,
    ReceiveStockRequest,
    RegisterProductRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from ordering.cart.management import ClearCart, OpenCart
from ordering.inventory.product import Product
from ordering.inventory.registration import ReceiveStock, RegisterProduct
from ordering.order.access import assert_can_access
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import CheckoutCart, PlaceOrder
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.order import Order
from ordering.order.payment import MarkOrderPaid
from ordering.utils.settings import setting


def _cart_of(principal: Principal) -> CartResponse:
    cart = current_domain.repository_for(Cart).for_customer(principal.id)
    return CartResponse.from_domain(cart)


def _order(order_id: str) -> OrderResponse:
    return OrderResponse.from_domain(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=ApiResponse[CartResponse])
async def get_cart(principal: Principal = Depends(current_principal)) -> ApiResponse[CartResponse]:
    current_domain.process(OpenCart(customer_id=principal.id), asynchronous=False)
    return ApiResponse[CartResponse](data=_cart_of(principal))


@cart_router.post("", response_model=ApiResponse[CartResponse])
async def add_to_cart(
    body: AddToCartRequest,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[CartResponse]:
    command = AddToCart(
        customer_id=principal.id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[CartResponse](message="Item added to cart", data=_cart_of(principal))


@cart_router.post("/checkout", status_code=201, response_model=ApiResponse[OrderResponse])
async def checkout_cart(
    body: CheckoutRequest,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[OrderResponse]:
    """Place an order from the cart's items and empty the cart."""
    command = CheckoutCart(
        customer_id=principal.id,
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
        tax_price=body.tax_price,
        shipping_price=body.shipping_price,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[OrderResponse](message="Order placed", data=_order(order_id))


@cart_router.put("/{item_id}", response_model=ApiResponse[CartResponse])
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[CartResponse]:
    command = UpdateCartItem(
        customer_id=principal.id,
        item_id=item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[CartResponse](message="Cart updated", data=_cart_of(principal))


@cart_router.delete("/{item_id}", response_model=ApiResponse[CartResponse])
async def remove_from_cart(
    item_id: str,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[CartResponse]:
    command = RemoveFromCart(customer_id=principal.id, item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return ApiResponse[CartResponse](message="Item removed from cart", data=_cart_of(principal))


@cart_router.delete("", response_model=ApiResponse[CartResponse])
async def clear_cart(principal: Principal = Depends(current_principal)) -> ApiResponse[CartResponse]:
    current_domain.process(ClearCart(customer_id=principal.id), asynchronous=False)
    return ApiResponse[CartResponse](message="Cart cleared", data=_cart_of(principal))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=ApiResponse[OrderResponse])
async def create_order(
    body: CreateOrderRequest,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[OrderResponse]:
    command = PlaceOrder(
        customer_id=principal.id,
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
        items_price=body.pricing.items_price,
        tax_price=body.pricing.tax_price,
        shipping_price=body.pricing.shipping_price,
        total_price=body.pricing.total_price,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[OrderResponse](message="Order placed", data=_order(order_id))


@order_router.get("/mine", response_model=ApiResponse[list[OrderResponse]])
async def my_orders(principal: Principal = Depends(current_principal)) -> ApiResponse[list[OrderResponse]]:
    orders = current_domain.repository_for(Order).for_customer(principal.id)
    return ApiResponse[list[OrderResponse]](data=[OrderResponse.from_domain(o) for o in orders])


@order_router.get("", response_model=ApiResponse[OrderPageResponse])
async def all_orders(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
    _: Principal = Depends(require_admin),
) -> ApiResponse[OrderPageResponse]:
    result = current_domain.repository_for(Order).page(page=page, limit=limit or setting("ORDERS_PAGE_SIZE"))
    return ApiResponse[OrderPageResponse](
        data=OrderPageResponse(
            orders=[OrderResponse.from_domain(o) for o in result["orders"]],
            count=result["count"],
            total=result["total"],
            page=result["page"],
            pages=result["pages"],
        )
    )


@order_router.get("/{order_id}", response_model=ApiResponse[OrderResponse])
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> ApiResponse[OrderResponse]:
    order = current_domain.repository_for(Order).get(order_id)
    assert_can_access(order, principal.id, principal.role)
    return ApiResponse[OrderResponse](data=OrderResponse.from_domain(order))


@order_router.put("/{order_id}/pay", response_model=ApiResponse[OrderResponse])
async def pay_order(
    order_id: str,
    body: PayOrderRequest,
    principal: Principal = Depends(current_principal),
) -> ApiResponse[OrderResponse]:
    command = MarkOrderPaid(
        order_id=order_id,
        receipt_id=body.receipt.id,
        status=body.receipt.status,
        update_time=body.receipt.update_time,
        email_address=body.receipt.email_address,
        requester_id=principal.id,
        requester_role=principal.role,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[OrderResponse](message="Order marked as paid", data=_order(order_id))


@order_router.put("/{order_id}/status", response_model=ApiResponse[OrderResponse])
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(require_admin),
) -> ApiResponse[OrderResponse]:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        requester_id=principal.id,
        requester_role=principal.role,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[OrderResponse](message="Order status updated", data=_order(order_id))


@order_router.put("/{order_id}/cancel", response_model=ApiResponse[OrderResponse])
async def cancel_order(order_id: str, principal: Principal = Depends(current_principal)) -> ApiResponse[OrderResponse]:
    command = CancelOrder(
        order_id=order_id,
        requester_id=principal.id,
        requester_role=principal.role,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[OrderResponse](message="Order cancelled", data=_order(order_id))


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory/products", tags=["inventory"])


@inventory_router.post("", status_code=201, response_model=ApiResponse[ProductResponse])
async def register_product(
    body: RegisterProductRequest,
    _: Principal = Depends(require_admin),
) -> ApiResponse[ProductResponse]:
    command = RegisterProduct(
        product_id=body.product_id,
        name=body.name,
        price=body.price,
        stock=body.stock,
        image=body.image,
        sizes=json.dumps(body.sizes),
        colors=json.dumps(body.colors),
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ApiResponse[ProductResponse](message="Product registered", data=ProductResponse.from_domain(product))


@inventory_router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_product(product_id: str, _: Principal = Depends(current_principal)) -> ApiResponse[ProductResponse]:
    product = current_domain.repository_for(Product).get(product_id)
    return ApiResponse[ProductResponse](data=ProductResponse.from_domain(product))


@inventory_router.put("/{product_id}/stock", response_model=ApiResponse[ProductResponse])
async def receive_stock(
    product_id: str,
    body: ReceiveStockRequest,
    _: Principal = Depends(require_admin),
) -> ApiResponse[ProductResponse]:
    current_domain.process(ReceiveStock(product_id=product_id, quantity=body.quantity), asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ApiResponse[ProductResponse](message="Stock received", data=ProductResponse.from_domain(product))
