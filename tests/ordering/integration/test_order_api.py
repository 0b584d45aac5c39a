"""Integration tests for Order API endpoints via TestClient."""

import pytest

CUSTOMER = {"X-User-Id": "cust-001", "X-User-Role": "user"}
OTHER_CUSTOMER = {"X-User-Id": "cust-002", "X-User-Role": "user"}
ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


def _create_order(client, address, lines, headers=CUSTOMER, **extra):
    body = {"items": lines, "shippingAddress": address, "paymentMethod": "COD"}
    body.update(extra)
    return client.post("/orders", json=body, headers=headers)


@pytest.fixture()
def dress(make_product):
    return make_product(stock=5, price=1499.0, name="Floral Maxi Dress")


@pytest.fixture()
def order_id(client, dress, shipping_address):
    response = _create_order(client, shipping_address, [{"productId": dress, "quantity": 2, "size": "M"}])
    assert response.status_code == 201
    return response.json()["data"]["id"]


class TestCreateOrder:
    def test_create_returns_201(self, client, dress, stock_of, shipping_address):
        response = _create_order(
            client,
            shipping_address,
            [{"productId": dress, "quantity": 2, "size": "M", "color": "Red"}],
            pricing={"taxPrice": 100.0, "shippingPrice": 50.0},
        )
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        order = body["data"]
        assert order["status"] == "Processing"
        assert order["isPaid"] is False
        assert order["isDelivered"] is False
        assert order["customerId"] == "cust-001"
        assert order["items"][0]["name"] == "Floral Maxi Dress"
        assert order["items"][0]["price"] == 1499.0
        assert order["pricing"]["itemsPrice"] == 2998.0
        assert order["pricing"]["totalPrice"] == 3148.0
        assert stock_of(dress) == 3

    def test_client_price_is_ignored(self, client, dress, shipping_address):
        response = _create_order(
            client,
            shipping_address,
            [{"productId": dress, "quantity": 1, "size": "M", "price": 1.0}],
        )
        assert response.json()["data"]["items"][0]["price"] == 1499.0

    def test_empty_items(self, client, shipping_address):
        response = _create_order(client, shipping_address, [])
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "No order items",
            "errors": {"items": ["No order items"]},
        }

    def test_insufficient_stock_leaves_stock_alone(self, client, make_product, stock_of, shipping_address):
        dress = make_product(stock=5)
        jacket = make_product(stock=1, name="Denim Jacket")
        response = _create_order(
            client,
            shipping_address,
            [
                {"productId": dress, "quantity": 2, "size": "M"},
                {"productId": jacket, "quantity": 2, "size": "L"},
            ],
        )
        assert response.status_code == 400
        assert "Insufficient stock" in response.json()["message"]
        assert stock_of(dress) == 5
        assert stock_of(jacket) == 1

    def test_unknown_product(self, client, shipping_address):
        response = _create_order(client, shipping_address, [{"productId": "missing", "quantity": 1, "size": "M"}])
        assert response.status_code == 404

    def test_missing_address_field(self, client, dress, shipping_address):
        shipping_address.pop("city")
        response = _create_order(client, shipping_address, [{"productId": dress, "quantity": 1, "size": "M"}])
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestReadOrders:
    def test_owner_reads_order(self, client, order_id):
        response = client.get(f"/orders/{order_id}", headers=CUSTOMER)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == order_id

    def test_admin_reads_any_order(self, client, order_id):
        assert client.get(f"/orders/{order_id}", headers=ADMIN).status_code == 200

    def test_stranger_forbidden(self, client, order_id):
        response = client.get(f"/orders/{order_id}", headers=OTHER_CUSTOMER)
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_unknown_order(self, client):
        assert client.get("/orders/missing", headers=CUSTOMER).status_code == 404

    def test_my_orders(self, client, order_id, dress, shipping_address):
        _create_order(
            client,
            shipping_address,
            [{"productId": dress, "quantity": 1, "size": "M"}],
            headers=OTHER_CUSTOMER,
        )
        response = client.get("/orders/mine", headers=CUSTOMER)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()["data"]] == [order_id]

    def test_admin_listing(self, client, order_id):
        response = client.get("/orders", params={"page": 1, "limit": 5}, headers=ADMIN)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["pages"] == 1
        assert data["orders"][0]["id"] == order_id

    def test_listing_requires_admin(self, client, order_id):
        assert client.get("/orders", headers=CUSTOMER).status_code == 403


class TestPayOrder:
    def test_pay(self, client, order_id):
        response = client.put(
            f"/orders/{order_id}/pay",
            json={
                "receipt": {
                    "id": "pay-9001",
                    "status": "COMPLETED",
                    "updateTime": "2026-10-02T11:00:00Z",
                    "emailAddress": "asha@example.in",
                }
            },
            headers=CUSTOMER,
        )
        assert response.status_code == 200
        order = response.json()["data"]
        assert order["isPaid"] is True
        assert order["paidAt"] is not None
        assert order["paymentResult"]["id"] == "pay-9001"
        assert order["paymentResult"]["emailAddress"] == "asha@example.in"

    def test_pay_by_stranger(self, client, order_id):
        response = client.put(f"/orders/{order_id}/pay", json={"receipt": {"id": "pay-1"}}, headers=OTHER_CUSTOMER)
        assert response.status_code == 403


class TestUpdateStatus:
    def test_admin_ships(self, client, order_id):
        response = client.put(
            f"/orders/{order_id}/status",
            json={"status": "Shipped", "trackingNumber": "TRK-77"},
            headers=ADMIN,
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Shipped"
        assert response.json()["data"]["trackingNumber"] == "TRK-77"

    def test_delivered_sets_flags(self, client, order_id):
        data = client.put(f"/orders/{order_id}/status", json={"status": "Delivered"}, headers=ADMIN).json()["data"]
        assert data["isDelivered"] is True
        assert data["deliveredAt"] is not None

    def test_customer_cannot_update_status(self, client, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "Shipped"}, headers=CUSTOMER)
        assert response.status_code == 403

    def test_unknown_status(self, client, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "Lost"}, headers=ADMIN)
        assert response.status_code == 400

    def test_leaving_delivered_rejected(self, client, order_id):
        client.put(f"/orders/{order_id}/status", json={"status": "Delivered"}, headers=ADMIN)
        response = client.put(f"/orders/{order_id}/status", json={"status": "Processing"}, headers=ADMIN)
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot transition from Delivered to Processing"


class TestCancelOrder:
    def test_cancel_releases_stock(self, client, order_id, dress, stock_of):
        assert stock_of(dress) == 3
        response = client.put(f"/orders/{order_id}/cancel", headers=CUSTOMER)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Cancelled"
        assert data["cancelledAt"] is not None
        assert stock_of(dress) == 5

    def test_cancel_after_shipping(self, client, order_id, dress, stock_of):
        client.put(f"/orders/{order_id}/status", json={"status": "Shipped"}, headers=ADMIN)
        response = client.put(f"/orders/{order_id}/cancel", headers=CUSTOMER)
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert stock_of(dress) == 3

    def test_stranger_cannot_cancel(self, client, order_id):
        assert client.put(f"/orders/{order_id}/cancel", headers=OTHER_CUSTOMER).status_code == 403
