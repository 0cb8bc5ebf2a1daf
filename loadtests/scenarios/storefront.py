"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys covering checkout, the fulfillment
simulation, discounts, replacements, stock browsing and the assistant chat
relay. Steps execute in order — each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    SEED_ORDER_IDS,
    chat_message,
    discount_data,
    order_data,
    status_data,
)
from loadtests.helpers.response import extract_error_detail, is_stock_exhausted
from loadtests.helpers.state import ChatState, OrderState


class CheckoutJourney(SequentialTaskSet):
    """Place Order -> Advance x4 -> Track.

    Walks a fresh order from pending through to delivered, the same path the
    fulfillment simulation takes on its own.
    """

    def on_start(self):
        self.state = OrderState()

    @task
    def place_order(self):
        payload = order_data()
        with self.client.post(
            "/orders",
            json=payload,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["id"]
                self.state.email = body["email"]
            elif is_stock_exhausted(resp):
                # Catalog drained by earlier users; not a server fault
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def advance_to_delivered(self):
        for _ in range(4):
            with self.client.put(
                f"/orders/{self.state.order_id}/advance",
                catch_response=True,
                name="PUT /orders/{id}/advance",
            ) as resp:
                if resp.status_code == 200:
                    body = resp.json()
                    self.state.current_status = body["status"]
                    self.state.tracking_number = body["tracking_number"]
                else:
                    resp.failure(f"Advance failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def track(self):
        with self.client.get(
            f"/orders/{self.state.order_id}/tracking",
            catch_response=True,
            name="GET /orders/{id}/tracking",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Tracking failed: {resp.status_code} — {extract_error_detail(resp)}")
            elif self.state.current_status != "delivered":
                resp.failure(f"Order stopped at {self.state.current_status}")

    @task
    def lookup_by_email(self):
        with self.client.get(
            "/orders",
            params={"email": self.state.email},
            catch_response=True,
            name="GET /orders?email",
        ) as resp:
            if resp.status_code == 200 and not resp.json():
                resp.failure("Order missing from email lookup")

    @task
    def done(self):
        self.interrupt()


class CustomerServiceJourney(SequentialTaskSet):
    """Look up Order -> Set Status -> Issue Discount.

    Models an agent handling a complaint about one of the seeded orders.
    """

    def on_start(self):
        self.state = OrderState(order_id=random.choice(SEED_ORDER_IDS))

    @task
    def lookup(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["status"]
            else:
                resp.failure(f"Lookup failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def set_status(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/status",
            json=status_data(),
            catch_response=True,
            name="PUT /orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["status"]
            else:
                resp.failure(f"Set status failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def issue_discount(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/discounts",
            json=discount_data(),
            catch_response=True,
            name="POST /orders/{id}/discounts",
        ) as resp:
            if resp.status_code == 201:
                self.state.discount_codes.append(resp.json()["code"])
            else:
                resp.failure(f"Discount failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ReplacementJourney(SequentialTaskSet):
    """Trigger Replacement -> Check Stock Alerts.

    Replacements draw down stock, so a sustained run eventually sees 409s.
    Those are recorded as successes since the service answered correctly.
    """

    @task
    def trigger_replacement(self):
        order_id = random.choice(SEED_ORDER_IDS)
        with self.client.post(
            f"/orders/{order_id}/replacement",
            catch_response=True,
            name="POST /orders/{id}/replacement",
        ) as resp:
            if resp.status_code == 201 or is_stock_exhausted(resp):
                resp.success()
            else:
                resp.failure(f"Replacement failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def stock_alerts(self):
        with self.client.get(
            "/products/stock-alerts",
            catch_response=True,
            name="GET /products/stock-alerts",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Stock alerts failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class BrowseJourney(SequentialTaskSet):
    """List Products -> Check Stock for a few SKUs."""

    def on_start(self):
        self.skus = []

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.skus = [p["sku"] for p in resp.json()]
            else:
                resp.failure(f"List products failed: {resp.status_code}")
                self.interrupt()

    @task
    def check_stock(self):
        for sku in random.sample(self.skus, k=min(3, len(self.skus))):
            with self.client.get(
                f"/products/{sku}/stock",
                catch_response=True,
                name="GET /products/{sku}/stock",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Stock check failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class ChatJourney(SequentialTaskSet):
    """Start Conversation -> Send Message -> Poll Replies."""

    def on_start(self):
        self.state = ChatState()

    @task
    def start_conversation(self):
        with self.client.post(
            "/chat/conversations",
            catch_response=True,
            name="POST /chat/conversations",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.conversation_id = body["conversation_id"]
                self.state.token = body["token"]
            else:
                resp.failure(f"Start conversation failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def send_message(self):
        with self.client.post(
            f"/chat/conversations/{self.state.conversation_id}/activities",
            json={"token": self.state.token, "text": chat_message()},
            catch_response=True,
            name="POST /chat/conversations/{id}/activities",
        ) as resp:
            if resp.status_code == 200:
                self.state.messages_sent += 1
            else:
                resp.failure(f"Send message failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def poll(self):
        with self.client.get(
            f"/chat/conversations/{self.state.conversation_id}/activities",
            params={"token": self.state.token},
            catch_response=True,
            name="GET /chat/conversations/{id}/activities",
        ) as resp:
            if resp.status_code == 200:
                self.state.watermark = resp.json()["watermark"]
            else:
                resp.failure(f"Poll failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class StorefrontUser(HttpUser):
    """Locust user simulating a mixed storefront workload.

    Weighted distribution:
    - 35% Checkout (most common shopper activity)
    - 25% Browse
    - 15% Customer service
    - 15% Chat
    - 10% Replacement
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CheckoutJourney: 7,
        BrowseJourney: 5,
        CustomerServiceJourney: 3,
        ChatJourney: 3,
        ReplacementJourney: 2,
    }


class SimulationTickUser(HttpUser):
    """Drives the bulk simulation tick the way a scheduler would."""

    wait_time = between(5.0, 10.0)
    weight = 1

    @task
    def advance_all(self):
        with self.client.post("/orders/advance", catch_response=True, name="POST /orders/advance") as resp:
            if resp.status_code != 200:
                resp.failure(f"Advance all failed: {resp.status_code} — {extract_error_detail(resp)}")
