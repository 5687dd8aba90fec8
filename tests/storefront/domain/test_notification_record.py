"""Tests for the Notification aggregate and the status notice templates."""

from storefront.notification.events import NotificationCreated, NotificationRead
from storefront.notification.notification import Notification
from storefront.notification.templates import get_status_notice
from storefront.order.order import OrderStatus


class TestNotification:
    def test_create_is_unread(self):
        notification = Notification.create(user_id="user-001", title="Hi", message="Hello")
        assert notification.read is False
        assert notification.created_at is not None
        assert isinstance(notification._events[-1], NotificationCreated)

    def test_mark_read(self):
        notification = Notification.create(user_id="user-001", title="Hi", message="Hello")
        notification.mark_read()
        assert notification.read is True
        assert notification.read_at is not None
        assert isinstance(notification._events[-1], NotificationRead)

    def test_mark_read_twice_raises_one_event(self):
        notification = Notification.create(user_id="user-001", title="Hi", message="Hello")
        notification.mark_read()
        notification.mark_read()
        assert sum(isinstance(e, NotificationRead) for e in notification._events) == 1


class TestStatusNotices:
    def test_cancelled_notice(self):
        notice = get_status_notice(OrderStatus.CANCELLED).render("ord-42")
        assert notice == {"title": "Order Cancelled", "message": "Your order ord-42 has been cancelled."}

    def test_return_rejected_notice(self):
        notice = get_status_notice(OrderStatus.RETURN_REJECTED).render("ord-42")
        assert notice["title"] == "Return Rejected"
        assert "ord-42" in notice["message"]

    def test_shipping_is_not_announced(self):
        assert get_status_notice(OrderStatus.SHIPPED) is None
        assert get_status_notice(OrderStatus.CANCEL_REQUESTED) is None
