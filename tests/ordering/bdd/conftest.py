"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.cart.items import AddToCart
from ordering.inventory.product import Product
from ordering.inventory.registration import RegisterProduct
from ordering.order.creation import CheckoutCart
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.order import Order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer_id():
    return "cust-001"


@pytest.fixture()
def other_customer_id():
    return "cust-002"


@pytest.fixture()
def products():
    """Product name -> product id, filled by Given steps."""
    return {}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def placed():
    return {"order_id": None}


def _product(name, products):
    return current_domain.repository_for(Product).get(products[name])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:g} with {stock:d} in stock'))
def registered_product(name, price, stock, products):
    products[name] = current_domain.process(
        RegisterProduct(
            name=name,
            price=price,
            stock=stock,
            sizes=json.dumps(["S", "M", "L"]),
            colors=json.dumps(["Red"]),
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the customer has {qty:d} of "{name}" in the cart'))
def item_in_cart(qty, name, products, customer_id):
    current_domain.process(
        AddToCart(customer_id=customer_id, product_id=products[name], quantity=qty, size="M"),
        asynchronous=False,
    )


@given(parsers.cfparse('another customer has {qty:d} of "{name}" in the cart'))
def item_in_other_cart(qty, name, products, other_customer_id):
    item_in_cart(qty, name, products, other_customer_id)


@given("the customer checked out the cart")
def checked_out(customer_id, placed):
    placed["order_id"] = _checkout(customer_id)


@given(parsers.cfparse('the order was marked "{status}"'))
def order_marked(status, placed):
    _update_status(placed["order_id"], status)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
def _checkout(customer_id):
    return current_domain.process(
        CheckoutCart(
            customer_id=customer_id,
            shipping_address=json.dumps(
                {"street": "9 Anna Salai", "city": "Chennai", "state": "Tamil Nadu", "zip_code": "600002"}
            ),
            payment_method="COD",
        ),
        asynchronous=False,
    )


def _update_status(order_id, status):
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=status, requester_id="admin-001", requester_role="admin"),
        asynchronous=False,
    )


@when("the customer checks out the cart")
def checkout(customer_id, placed, error):
    try:
        placed["order_id"] = _checkout(customer_id)
    except (ValidationError, ObjectNotFoundError) as exc:
        error["exc"] = exc


@when("the other customer checks out the cart")
def other_checkout(other_customer_id, error):
    try:
        _checkout(other_customer_id)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('an admin marks the order "{status}"'))
def admin_marks(status, placed):
    _update_status(placed["order_id"], status)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def stock_is(name, stock, products):
    assert _product(name, products).stock == stock


@then("the request fails with insufficient stock")
def fails_with_insufficient_stock(error):
    assert error["exc"] is not None
    assert "Insufficient stock" in error["exc"].messages["quantity"][0]


@then(parsers.cfparse('the order is "{status}"'))
def order_status_is(status, placed):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then("no order was placed")
def no_order(placed):
    assert placed["order_id"] is None
    assert current_domain.repository_for(Order)._dao.query.all().items == []
