"""BDD tests for replacement orders and discount codes."""

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.catalog.product import InsufficientStock
from storefront.discount.issuance import ApplyDiscount
from storefront.order.order import Order
from storefront.order.replacement import TriggerReplacement

scenarios("features/replacement.feature")


@when(parsers.cfparse('a replacement is requested for "{order_id}"'), target_fixture="replacement")
def request_replacement(order_id, error):
    try:
        return current_domain.process(TriggerReplacement(order_id=order_id), asynchronous=False)
    except InsufficientStock as exc:
        error["exc"] = exc
        return None


@when(
    parsers.cfparse('a {percentage:d} percent discount is issued twice for "{order_id}"'),
    target_fixture="codes",
)
def issue_two_discounts(percentage, order_id):
    return [
        current_domain.process(ApplyDiscount(order_id=order_id, percentage=percentage), asynchronous=False)["code"]
        for _ in range(2)
    ]


@then("the replacement succeeds")
def replacement_succeeds(replacement):
    assert replacement["success"] is True
    assert replacement["tracking_number"].startswith("TRK-RPL-")


@then(parsers.cfparse('"{sku}" is reported with {remaining:d} units remaining'))
def low_stock_reported(replacement, sku, remaining):
    alerts = {alert["sku"]: alert["remaining_stock"] for alert in replacement["low_stock_alerts"]}
    assert alerts[sku] == remaining


@then("the replacement order is free and being processed")
def replacement_order_free(replacement):
    order = current_domain.repository_for(Order).get(replacement["new_order_id"])
    assert order.total == 0
    assert order.status == "processing"
    assert len(order.tracking_events) == 2


@then(parsers.cfparse('the replacement is rejected for insufficient stock of "{sku}"'))
def replacement_rejected(replacement, error, sku):
    assert replacement is None
    assert error["exc"].sku == sku


@then("two different codes were issued")
def distinct_codes(codes):
    assert len(set(codes)) == 2


@then(parsers.cfparse('order "{order_id}" carries the latest code'))
def order_carries_latest_code(codes, order_id):
    assert current_domain.repository_for(Order).get(order_id).discount_code == codes[-1]
