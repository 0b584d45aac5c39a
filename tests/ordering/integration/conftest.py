import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, inventory_router, order_router, register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(inventory_router)
    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def shipping_address():
    return {
        "street": "221 Linking Road",
        "city": "Mumbai",
        "state": "Maharashtra",
        "zipCode": "400050",
        "country": "India",
    }
