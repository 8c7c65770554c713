"""BDD tests for the order placement flow."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from marketplace.catalogue.product import Product
from marketplace.exceptions import InsufficientStock
from marketplace.ordering.order import Order

scenarios("features/order_flow.feature")


@pytest.fixture()
def listing():
    return {}


@pytest.fixture()
def outcome():
    return {"order_id": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a seller with an approved store")
def seller_with_store(store_id):
    assert store_id


@given(parsers.cfparse('the seller lists "{name}" at {price:f} with {stock:d} in stock'))
def seller_lists_product(make_product, listing, name, price, stock):
    listing[name] = make_product(name=name, price=price, stock_quantity=stock)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('a shopper orders {quantity:d} of "{name}"'))
def shopper_orders(place_order, listing, outcome, quantity, name):
    try:
        outcome["order_id"] = place_order([{"product_id": listing[name], "quantity": quantity}])
    except InsufficientStock as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total:f}"))
def order_total(outcome, total):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).total_amount == pytest.approx(total)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(listing, name, stock):
    assert current_domain.repository_for(Product).get(listing[name]).stock_quantity == stock


@then(parsers.cfparse("the shopper received exactly {count:d} order confirmation"))
def confirmation_count(shopper, outbox, count):
    confirmations = [e for e in outbox.sent_to(shopper.email) if e["subject"].startswith("Order Confirmation")]
    assert len(confirmations) == count


@then("the order is rejected for insufficient stock")
def rejected(outcome):
    assert isinstance(outcome["error"], InsufficientStock)


@then("no order was recorded")
def no_order():
    assert current_domain.repository_for(Order).list_all() == []
