import json

import pytest
from ordering.inventory.product import Product
from ordering.inventory.registration import RegisterProduct
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def make_product():
    """Register a catalog product in the inventory ledger and return its id."""

    def _make(stock=5, price=49.0, name="Floral Maxi Dress", **overrides):
        defaults = {
            "name": name,
            "price": price,
            "stock": stock,
            "image": "https://cdn.example.com/dresses/floral-maxi.jpg",
            "sizes": json.dumps(["S", "M", "L"]),
            "colors": json.dumps(["Red", "Blue"]),
        }
        defaults.update(overrides)
        return current_domain.process(RegisterProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def stock_of():
    def _stock(product_id):
        return current_domain.repository_for(Product).get(product_id).stock

    return _stock


@pytest.fixture()
def address():
    return {
        "street": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zip_code": "560001",
        "country": "India",
    }
