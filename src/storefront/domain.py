"""Storefront bounded context: the shopper journey from cart to order.

Thin-client shop backend: per-user carts and wishlists, coupon-discounted
checkout that compiles an immutable order, and an admin-driven order lifecycle
that notifies customers on status changes.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
