"""Contended checkout scenario.

Every simulated customer races to buy the same small batch of products.
The only acceptable outcomes are a placed order or a clean
"Insufficient stock" rejection; stock must never go negative and the units
sold must never exceed the units registered.
"""

import threading

import requests
from locust import HttpUser, between, events, task

from loadtests.data_generators import admin_headers, customer_headers, order_data, product_data
from loadtests.helpers.response import data_of, extract_error_detail, is_insufficient_stock

CONTENDED_STOCK = 25

_lock = threading.Lock()
_shared = {"product_id": None, "sold": 0}


def _contended_product(client) -> str | None:
    with _lock:
        if _shared["product_id"] is None:
            resp = client.post(
                "/inventory/products",
                json=product_data(stock=CONTENDED_STOCK),
                headers=admin_headers(),
                name="POST /inventory/products [contended]",
            )
            if resp.status_code == 201:
                _shared["product_id"] = data_of(resp)["id"]
        return _shared["product_id"]


class ContendedCheckoutUser(HttpUser):
    """Concurrent customers ordering one product with limited stock."""

    wait_time = between(0.05, 0.5)

    def on_start(self):
        self.headers = customer_headers()
        self.product_id = _contended_product(self.client)

    @task
    def buy_one(self):
        if self.product_id is None:
            return
        with self.client.post(
            "/orders",
            json=order_data([self.product_id]),
            headers=self.headers,
            catch_response=True,
            name="POST /orders [contended]",
        ) as resp:
            if resp.status_code == 201:
                with _lock:
                    _shared["sold"] += 1
            elif is_insufficient_stock(resp) or resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"Contended order failed: {resp.status_code} — {extract_error_detail(resp)}")


@events.test_stop.add_listener
def check_stock_consistency(environment, **_kwargs):
    """Compare units sold with what the ledger still holds."""
    if _shared["product_id"] is None or environment.host is None:
        return
    resp = requests.get(
        f"{environment.host}/inventory/products/{_shared['product_id']}",
        headers=admin_headers(),
        timeout=5,
    )
    if resp.status_code != 200:
        print(f"[LOADTEST] Could not read contended product: {extract_error_detail(resp)}")
        return

    remaining = resp.json()["data"]["stock"]
    print(f"[LOADTEST] Contended product: {_shared['sold']} sold, {remaining} left of {CONTENDED_STOCK}")
    if remaining < 0 or _shared["sold"] + remaining != CONTENDED_STOCK:
        print("[LOADTEST] STOCK INCONSISTENCY DETECTED")
        environment.process_exit_code = 1
