"""Storefront Load Testing — Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Shopper workload only:
    locust -f loadtests/locustfile.py StorefrontUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py StorefrontUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import SimulationTickUser, StorefrontUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios — no per-task wiring needed.
    Extracts the API error body so you see "Insufficient stock for Surface Go 4"
    instead of just "409".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the stock left in the catalog when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return
    try:
        resp = requests.get(f"{environment.host}/products/stock-alerts", timeout=5)
        resp.raise_for_status()
        alerts = resp.json()
        print("[LOADTEST] Final stock alerts:")
        for product in alerts["low_stock"]:
            print(f"  low   {product['sku']}: {product['stock']}")
        for product in alerts["out_of_stock"]:
            print(f"  empty {product['sku']}")
        print()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch stock alerts: {e}\n")
