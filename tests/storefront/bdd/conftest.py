"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from storefront.errors import InvalidQuantity, InvalidTransitionError
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order

# Map event name strings to classes for dynamic lookup in Then steps
_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderStatusChanged": OrderStatusChanged,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps: Order
# ---------------------------------------------------------------------------
@given("a placed order", target_fixture="order")
def placed_order():
    order = Order.place(
        user_id="user-001",
        customer_name="Asha Rao",
        phone="9876543210",
        address="12 MG Road",
        payment_method="COD",
        items=[{"product_id": "prod-001", "name": "Charger", "price": 500.0, "quantity": 1}],
    )
    order._events.clear()
    return order


@given("the order was shipped", target_fixture="order")
def shipped_order(order):
    order.ship()
    order._events.clear()
    return order


@given("the order was delivered", target_fixture="order")
def delivered_order(order):
    order.deliver()
    order._events.clear()
    return order


@given("cancellation was requested", target_fixture="order")
def cancellation_requested(order):
    order.request_cancellation("Ordered by mistake")
    order._events.clear()
    return order


@given("a return was requested", target_fixture="order")
def return_requested(order):
    order.request_return("Other")
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps: Order
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with an invalid transition")
def order_action_fails_with_invalid_transition(error):
    assert isinstance(error["exc"], InvalidTransitionError)


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("an {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in order._events)


# ---------------------------------------------------------------------------
# Then steps: Cart
# ---------------------------------------------------------------------------
@then("the cart action fails with an invalid quantity")
def cart_action_fails_with_invalid_quantity(error):
    assert isinstance(error["exc"], InvalidQuantity)
