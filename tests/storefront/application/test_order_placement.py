"""Application tests for order placement and cart clearing."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.cart.items import AddToCart
from storefront.cart.queries import list_cart_items
from storefront.errors import EmptyOrder, MissingBillingInfo, RemoteOperationError
from storefront.order.order import Order, OrderStatus
from storefront.order.placement import PlaceOrder
from storefront.order.repository import OrderRepository


def _fill_cart(user_id, count=3):
    items = []
    for n in range(count):
        item = {
            "product_id": f"prod-{n}",
            "name": f"Accessory {n}",
            "price": 100.0 * (n + 1),
            "quantity": 1,
        }
        current_domain.process(AddToCart(user_id=user_id, **item), asynchronous=False)
        items.append(item)
    return items


def _place(user_id, items=None, **overrides):
    defaults = {
        "user_id": user_id,
        "customer_name": "Asha Rao",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "payment_method": "COD",
    }
    if items is not None:
        defaults["items"] = json.dumps(items)
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


class TestPlaceOrder:
    def test_order_is_persisted_as_placed(self, user_id):
        _fill_cart(user_id)
        order_id = _place(user_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PLACED.value
        assert order.user_id == user_id
        assert len(order.items) == 3
        assert order.total_amount == 600.0

    def test_discount_percent_is_applied(self, user_id):
        _fill_cart(user_id)
        order_id = _place(user_id, discount_percent=10, coupon_code="SAVE10")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.total_amount == pytest.approx(540.0)
        assert order.coupon_applied is True

    def test_success_clears_the_cart(self, user_id):
        _fill_cart(user_id)
        assert len(list_cart_items(user_id)) == 3

        _place(user_id)

        assert len(list_cart_items(user_id)) == 0

    def test_buy_now_leaves_the_cart_alone(self, user_id, phone_item):
        _fill_cart(user_id)
        _place(user_id, [phone_item], source="BuyNow")

        assert len(list_cart_items(user_id)) == 3

    def test_user_orders_are_newest_first(self, user_id, phone_item, case_item):
        first = _place(user_id, [phone_item], source="BuyNow")
        second = _place(user_id, [case_item], source="BuyNow")
        _place("someone-else", [case_item], source="BuyNow")

        orders = current_domain.repository_for(Order).for_user(user_id)
        assert [str(o.id) for o in orders] == [second, first]


class TestPlaceOrderFailures:
    def test_failed_write_keeps_the_cart(self, user_id, monkeypatch):
        _fill_cart(user_id)

        def failing_add(self, aggregate):
            raise RemoteOperationError("document store unavailable")

        monkeypatch.setattr(OrderRepository, "add", failing_add)

        with pytest.raises(RemoteOperationError):
            _place(user_id)

        monkeypatch.undo()
        assert len(list_cart_items(user_id)) == 3
        assert current_domain.repository_for(Order).for_user(user_id) == []

    def test_missing_billing_keeps_the_cart(self, user_id):
        _fill_cart(user_id)
        with pytest.raises(MissingBillingInfo):
            _place(user_id, address="")
        assert len(list_cart_items(user_id)) == 3

    def test_empty_cart(self, user_id):
        with pytest.raises(EmptyOrder):
            _place(user_id)

    def test_empty_buy_now(self, user_id):
        with pytest.raises(EmptyOrder):
            _place(user_id, [], source="BuyNow")

    def test_cart_order_rejects_supplied_items(self, user_id):
        _fill_cart(user_id, count=2)
        unrelated = {"product_id": "prod-zzz", "name": "Tripod", "price": 900.0, "quantity": 1}

        with pytest.raises(ValidationError) as exc_info:
            _place(user_id, [unrelated])

        assert "items" in exc_info.value.messages
        assert len(list_cart_items(user_id)) == 2
        assert current_domain.repository_for(Order).for_user(user_id) == []
