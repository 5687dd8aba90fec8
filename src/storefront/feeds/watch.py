"""Screen-facing subscriptions.

Each ``watch_*`` call registers a subscription, delivers the current snapshot
straight away and returns the handle. The screen closes the handle when it
goes away; watching again from the same screen replaces the old handle.
"""

from storefront.cart.queries import cart_snapshot
from storefront.feeds import CART, NOTIFICATIONS, ORDER_BOARD, ORDERS, WISHLIST, get_feed
from storefront.feeds.feed import Callback, Subscription
from storefront.notification.inbox import list_notifications
from storefront.order.queries import orders_for_user
from storefront.projections.order_board import board_rows
from storefront.wishlist.queries import wishlist_snapshot


def _watch(topic, user_id, loader, callback, screen) -> Subscription:
    subscription = get_feed().subscribe(topic, user_id, loader, callback, screen=screen)
    subscription.deliver()
    return subscription


def watch_cart(user_id, callback: Callback, screen: str | None = None) -> Subscription:
    user_id = str(user_id)
    return _watch(CART, user_id, lambda: cart_snapshot(user_id), callback, screen)


def watch_wishlist(user_id, callback: Callback, screen: str | None = None) -> Subscription:
    user_id = str(user_id)
    return _watch(WISHLIST, user_id, lambda: wishlist_snapshot(user_id), callback, screen)


def watch_orders(user_id, callback: Callback, screen: str | None = None) -> Subscription:
    user_id = str(user_id)
    return _watch(ORDERS, user_id, lambda: orders_for_user(user_id), callback, screen)


def watch_all_orders(callback: Callback, screen: str | None = None, status: str | None = None) -> Subscription:
    """Admin view: the order board, optionally narrowed to one status."""
    return _watch(ORDER_BOARD, None, lambda: board_rows(status=status), callback, screen)


def watch_notifications(user_id, callback: Callback, screen: str | None = None) -> Subscription:
    user_id = str(user_id)
    return _watch(NOTIFICATIONS, user_id, lambda: list_notifications(user_id), callback, screen)
