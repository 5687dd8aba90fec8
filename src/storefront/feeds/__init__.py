"""Change feed factory.

Provides get_feed() / reset_feed(); one feed is shared by the process.
"""

from storefront.feeds.feed import ChangeFeed

CART = "cart"
WISHLIST = "wishlist"
ORDERS = "orders"
ORDER_BOARD = "order_board"
NOTIFICATIONS = "notifications"

_current_feed: ChangeFeed | None = None


def get_feed() -> ChangeFeed:
    global _current_feed
    if _current_feed is None:
        _current_feed = ChangeFeed()
    return _current_feed


def reset_feed() -> None:
    """Close every subscription and drop the feed (useful for tests)."""
    global _current_feed
    if _current_feed is not None:
        _current_feed.close_all()
    _current_feed = None
