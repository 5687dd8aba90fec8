"""Event handlers that turn committed domain events into feed pushes.

Each handler only names the topic and the user; the subscriptions rebuild
their own snapshots.
"""

import structlog
from protean.utils.mixins import handle

from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.feeds import CART, NOTIFICATIONS, ORDERS, WISHLIST, get_feed
from storefront.notification.events import NotificationCreated, NotificationRead
from storefront.notification.notification import Notification
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order
from storefront.wishlist.events import WishlistItemAdded, WishlistItemRemoved
from storefront.wishlist.wishlist import Wishlist

logger = structlog.get_logger(__name__)


def _push(topic, event) -> None:
    delivered = get_feed().publish(topic, str(event.user_id))
    if delivered:
        logger.debug("Feed pushed", topic=topic, user_id=str(event.user_id), subscribers=delivered)


@storefront.event_handler(part_of=Cart)
class CartFeedPublisher:
    @handle(CartItemAdded)
    def on_item_added(self, event):
        _push(CART, event)

    @handle(CartQuantityUpdated)
    def on_quantity_updated(self, event):
        _push(CART, event)

    @handle(CartItemRemoved)
    def on_item_removed(self, event):
        _push(CART, event)

    @handle(CartCleared)
    def on_cleared(self, event):
        _push(CART, event)


@storefront.event_handler(part_of=Wishlist)
class WishlistFeedPublisher:
    @handle(WishlistItemAdded)
    def on_item_added(self, event):
        _push(WISHLIST, event)

    @handle(WishlistItemRemoved)
    def on_item_removed(self, event):
        _push(WISHLIST, event)


@storefront.event_handler(part_of=Order)
class OrderFeedPublisher:
    @handle(OrderPlaced)
    def on_order_placed(self, event):
        _push(ORDERS, event)

    @handle(OrderStatusChanged)
    def on_status_changed(self, event):
        _push(ORDERS, event)


@storefront.event_handler(part_of=Notification)
class NotificationFeedPublisher:
    @handle(NotificationCreated)
    def on_created(self, event):
        _push(NOTIFICATIONS, event)

    @handle(NotificationRead)
    def on_read(self, event):
        _push(NOTIFICATIONS, event)
