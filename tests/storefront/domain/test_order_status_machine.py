"""Tests for the order status machine."""

import pytest
from protean.exceptions import ValidationError

from storefront.errors import InvalidTransitionError, UnknownOrderStatus
from storefront.order.events import OrderStatusChanged
from storefront.order.order import Order, OrderStatus


def _order():
    return Order.place(
        user_id="user-001",
        customer_name="Asha Rao",
        phone="9876543210",
        address="12 MG Road",
        payment_method="Online",
        items=[{"product_id": "prod-a", "name": "Charger", "price": 500.0, "quantity": 1}],
    )


def _delivered():
    order = _order()
    order.ship()
    order.deliver()
    return order


class TestCustomerRequests:
    def test_cancel_on_placed_succeeds(self):
        order = _order()
        order.request_cancellation("Changed my mind")

        assert order.status == "Cancel Requested"
        assert order.cancel_reason == "Changed my mind"
        assert order.cancel_requested_at is not None

    def test_cancel_on_shipped_fails(self):
        order = _order()
        order.ship()
        with pytest.raises(InvalidTransitionError):
            order.request_cancellation("Changed my mind")
        assert order.status == "Shipped"
        assert order.cancel_requested_at is None

    def test_return_on_placed_fails(self):
        order = _order()
        with pytest.raises(InvalidTransitionError):
            order.request_return("Other")
        assert order.status == "Placed"

    def test_return_on_delivered_succeeds(self):
        order = _delivered()
        order.request_return("Other")

        assert order.status == "Return Requested"
        assert order.return_reason == "Other"
        assert order.return_requested_at is not None

    def test_reason_outside_the_list_is_rejected(self):
        order = _order()
        with pytest.raises(ValidationError) as exc_info:
            order.request_cancellation("Because")
        assert "reason" in exc_info.value.messages
        assert order.status == "Placed"


class TestAdminTransitions:
    def test_ship_then_deliver_stamps_both(self):
        order = _delivered()
        assert order.status == "Delivered"
        assert order.shipped_at is not None
        assert order.delivered_at is not None

    def test_placed_can_be_delivered_directly(self):
        order = _order()
        order.deliver()
        assert order.status == "Delivered"

    def test_approve_cancellation(self):
        order = _order()
        order.request_cancellation("Ordered by mistake")
        order.approve_cancellation()
        assert order.status == "Cancelled"
        assert order.cancelled_at is not None

    def test_rejected_cancellation_can_still_ship(self):
        order = _order()
        order.request_cancellation("Found cheaper elsewhere")
        order.reject_cancellation()
        order.ship()
        assert order.status == "Shipped"
        assert order.cancel_rejected_at is not None

    def test_approve_and_reject_return(self):
        approved = _delivered()
        approved.request_return("Other")
        approved.approve_return()
        assert approved.status == "Return Approved"

        rejected = _delivered()
        rejected.request_return("Other")
        rejected.reject_return()
        assert rejected.status == "Return Rejected"

    def test_cannot_approve_cancellation_without_request(self):
        order = _order()
        with pytest.raises(InvalidTransitionError):
            order.approve_cancellation()

    @pytest.mark.parametrize("action", ["ship", "deliver", "approve_cancellation", "reject_cancellation"])
    def test_cancelled_is_terminal(self, action):
        order = _order()
        order.request_cancellation("Other")
        order.approve_cancellation()
        with pytest.raises(InvalidTransitionError):
            getattr(order, action)()

    def test_transition_raises_status_changed(self):
        order = _order()
        order.ship()
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "Placed"
        assert event.new_status == "Shipped"
        assert event.actor == "Admin"


class TestStatusVocabulary:
    def test_can_transition_to(self):
        order = _order()
        assert order.can_transition_to(OrderStatus.SHIPPED)
        assert not order.can_transition_to(OrderStatus.RETURN_REQUESTED)

    def test_unknown_stored_status_is_a_data_error(self):
        order = _order()
        order.status = "Teleported"
        with pytest.raises(UnknownOrderStatus):
            order.ship()
