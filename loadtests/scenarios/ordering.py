"""Ordering load test scenarios.

Three stateful SequentialTaskSet journeys covering the cart, the full order
lifecycle through delivery, and cancellation with stock release. Each
journey registers its own products so journeys never contend for stock.
"""

from locust import SequentialTaskSet, task

from loadtests.data_generators import (
    admin_headers,
    cart_item_data,
    checkout_data,
    customer_headers,
    order_data,
    product_data,
    receipt_data,
    tracking_number,
)
from loadtests.helpers.response import data_of, extract_error_detail
from loadtests.helpers.state import CartState, OrderState


def register_products(client, count: int, stock: int | None = None) -> list[str]:
    """Register ``count`` fresh products as an admin and return their ids."""
    product_ids = []
    for _ in range(count):
        with client.post(
            "/inventory/products",
            json=product_data(stock=stock),
            headers=admin_headers(),
            catch_response=True,
            name="POST /inventory/products",
        ) as resp:
            if resp.status_code == 201:
                product_ids.append(data_of(resp)["id"])
            else:
                resp.failure(f"Register product failed: {resp.status_code} — {extract_error_detail(resp)}")
    return product_ids


class CartJourney(SequentialTaskSet):
    """Add Items -> Update Quantity -> Remove Item -> Checkout.

    Models a browsing customer who changes their mind before buying.
    """

    def on_start(self):
        self.state = CartState(headers=customer_headers())
        self.state.product_ids = register_products(self.client, 3)
        if len(self.state.product_ids) < 3:
            self.interrupt()

    @task
    def add_items(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart",
                json=cart_item_data(product_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart",
            ) as resp:
                if resp.status_code == 200:
                    self.state.item_ids = [item["id"] for item in data_of(resp)["items"]]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.item_ids:
            self.interrupt()
        with self.client.put(
            f"/cart/{self.state.item_ids[0]}",
            json={"quantity": 3},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/{itemId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update cart item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        with self.client.delete(
            f"/cart/{self.state.item_ids[-1]}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /cart/{itemId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove cart item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/cart/checkout",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /cart/checkout",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
            elif data_of(self.client.get("/cart", headers=self.state.headers, name="GET /cart"))["items"]:
                resp.failure("Cart not emptied after checkout")

    @task
    def done(self):
        self.interrupt()


class OrderLifecycleJourney(SequentialTaskSet):
    """Place Order -> Pay -> Confirm -> Ship -> In Transit -> Deliver.

    The happy path through the order status state machine.
    """

    def on_start(self):
        self.state = OrderState(headers=customer_headers())
        self.state.product_ids = register_products(self.client, 2)
        if len(self.state.product_ids) < 2:
            self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_ids),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = data_of(resp)["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/pay",
            json=receipt_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/pay",
        ) as resp:
            if resp.status_code != 200 or not data_of(resp)["isPaid"]:
                resp.failure(f"Pay order failed: {resp.status_code} — {extract_error_detail(resp)}")

    def _move_to(self, status, **extra):
        with self.client.put(
            f"/orders/{self.state.order_id}/status",
            json={"status": status, **extra},
            headers=admin_headers(),
            catch_response=True,
            name="PUT /orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Move to {status} failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm(self):
        self._move_to("Confirmed")

    @task
    def ship(self):
        self._move_to("Shipped", trackingNumber=tracking_number())

    @task
    def in_transit(self):
        self._move_to("In Transit")

    @task
    def deliver(self):
        self._move_to("Delivered")

    @task
    def read_history(self):
        self.client.get("/orders/mine", headers=self.state.headers, name="GET /orders/mine")

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(SequentialTaskSet):
    """Place Order -> Cancel -> verify stock came back.

    The unhappy path: every unit committed by the order must be released.
    """

    def on_start(self):
        self.state = OrderState(headers=customer_headers())
        self.state.product_ids = register_products(self.client, 2, stock=10)
        if len(self.state.product_ids) < 2:
            self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_ids, quantity=2),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = data_of(resp)["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def cancel(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "Cancelled"
            else:
                resp.failure(f"Cancel order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def verify_stock_released(self):
        for product_id in self.state.product_ids:
            with self.client.get(
                f"/inventory/products/{product_id}",
                headers=self.state.headers,
                catch_response=True,
                name="GET /inventory/products/{id}",
            ) as resp:
                if resp.status_code == 200 and data_of(resp)["stock"] != 10:
                    resp.failure(f"Stock not restored after cancellation: {data_of(resp)['stock']}")

    @task
    def done(self):
        self.interrupt()
