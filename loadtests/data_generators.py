"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the ordering core's validation
rules and use the camelCase field names the API's Pydantic schemas expect.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

SIZES = ["S", "M", "L", "XL", "XXL"]
COLORS = ["Red", "Blue", "Black", "Ivory", "Maroon", "Teal"]
PAYMENT_METHODS = ["COD", "Card", "UPI", "NetBanking"]
DRESS_STYLES = ["Maxi", "Midi", "Wrap", "Shift", "A-Line", "Anarkali", "Kaftan"]


# ---------- Identity ----------


def customer_headers(customer_id: str | None = None) -> dict:
    """Headers the upstream gateway forwards for a signed-in customer."""
    return {"X-User-Id": customer_id or f"cust-lt-{uuid.uuid4().hex[:8]}", "X-User-Role": "user"}


def admin_headers() -> dict:
    return {"X-User-Id": f"admin-lt-{uuid.uuid4().hex[:6]}", "X-User-Role": "admin"}


# ---------- Inventory ----------


def product_data(stock: int | None = None) -> dict:
    """Generate RegisterProductRequest payload."""
    style = random.choice(DRESS_STYLES)
    return {
        "productId": f"prod-lt-{uuid.uuid4().hex[:8]}",
        "name": f"{fake.color_name()} {style} Dress"[:200],
        "price": round(random.uniform(499.0, 8999.0), 2),
        "stock": stock if stock is not None else random.randint(20, 200),
        "image": f"https://cdn.example.com/dresses/{uuid.uuid4().hex[:10]}.jpg",
        "sizes": random.sample(SIZES, k=3),
        "colors": random.sample(COLORS, k=2),
    }


# ---------- Cart ----------


def cart_item_data(product_id: str, quantity: int | None = None) -> dict:
    """Generate AddToCartRequest payload."""
    return {
        "productId": product_id,
        "quantity": quantity or random.randint(1, 2),
        "size": random.choice(SIZES[:3]),
        "color": random.choice(COLORS),
    }


# ---------- Orders ----------


def shipping_address() -> dict:
    """Generate AddressSchema payload."""
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zipCode": fake.postcode()[:20],
        "country": "India",
    }


def order_data(product_ids: list[str], quantity: int = 1) -> dict:
    """Generate CreateOrderRequest payload for the given products."""
    return {
        "items": [
            {"productId": pid, "quantity": quantity, "size": random.choice(SIZES[:3])} for pid in product_ids
        ],
        "shippingAddress": shipping_address(),
        "paymentMethod": random.choice(PAYMENT_METHODS),
        "pricing": {
            "taxPrice": round(random.uniform(0, 500.0), 2),
            "shippingPrice": random.choice([0.0, 49.0, 99.0]),
        },
    }


def checkout_data() -> dict:
    """Generate CheckoutRequest payload."""
    return {
        "shippingAddress": shipping_address(),
        "paymentMethod": random.choice(PAYMENT_METHODS),
        "shippingPrice": random.choice([0.0, 49.0]),
    }


def receipt_data(email: str | None = None) -> dict:
    """Generate PayOrderRequest payload as returned by the payment provider."""
    return {
        "receipt": {
            "id": f"PAY-{uuid.uuid4().hex[:12].upper()}",
            "status": "COMPLETED",
            "updateTime": fake.iso8601(),
            "emailAddress": email or fake.free_email(),
        }
    }


def tracking_number() -> str:
    return f"TRK{uuid.uuid4().hex[:12].upper()}"
