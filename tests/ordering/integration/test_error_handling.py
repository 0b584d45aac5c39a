"""Integration tests for identity checks and the error envelope."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import register_exception_handlers
from ordering.api.errors import error_message
from ordering.exceptions import InsufficientStockError
from protean.exceptions import ExpectedVersionError, ValidationError

CUSTOMER = {"X-User-Id": "cust-001", "X-User-Role": "user"}


class TestIdentity:
    def test_missing_user_header(self, client):
        response = client.get("/cart")
        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["message"]

    def test_unknown_role(self, client):
        response = client.get("/cart", headers={"X-User-Id": "cust-001", "X-User-Role": "superuser"})
        assert response.status_code == 401

    def test_role_defaults_to_user(self, client):
        response = client.get("/orders", headers={"X-User-Id": "cust-001"})
        assert response.status_code == 403

    def test_admin_role_is_case_insensitive(self, client):
        response = client.get("/orders", headers={"X-User-Id": "admin-001", "X-User-Role": "Admin"})
        assert response.status_code == 200


class TestErrorEnvelope:
    def test_not_found_shape(self, client):
        response = client.get("/orders/missing", headers=CUSTOMER)
        assert response.status_code == 404
        body = response.json()
        assert set(body) == {"success", "message"}
        assert body["success"] is False

    def test_request_validation_is_400(self, client):
        response = client.post("/cart", json={"quantity": 1}, headers=CUSTOMER)
        assert response.status_code == 400
        assert "productId" in response.json()["message"]

    def test_non_integer_quantity_is_400(self, client):
        response = client.post("/cart", json={"productId": "p1", "quantity": "many"}, headers=CUSTOMER)
        assert response.status_code == 400


@pytest.fixture()
def failing_client():
    app = FastAPI()

    @app.get("/conflict")
    async def conflict():
        raise ExpectedVersionError("Wrong expected version: 3 (Aggregate: Product, Version: 4)")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


class TestUnexpectedErrors:
    def test_version_conflict_is_409(self, failing_client):
        response = failing_client.get("/conflict")
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_unhandled_error_is_500_without_details(self, failing_client):
        response = failing_client.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}


class TestErrorMessage:
    def test_flattens_field_messages(self):
        exc = ValidationError({"street": ["is required"], "city": ["is required"]})
        assert error_message(exc) == "is required; is required"

    def test_insufficient_stock(self):
        exc = InsufficientStockError("prod-001", available=1, requested=3)
        assert error_message(exc) == "Insufficient stock: 1 available, 3 requested"

    def test_plain_exception(self):
        assert error_message(RuntimeError("boom")) == "boom"
