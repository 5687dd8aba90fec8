from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    address_router,
    admin_coupon_router,
    admin_order_router,
    cart_router,
    checkout_router,
    notification_router,
    order_router,
    wishlist_router,
)

routers = [
    cart_router,
    wishlist_router,
    checkout_router,
    address_router,
    order_router,
    notification_router,
    admin_coupon_router,
    admin_order_router,
]

__all__ = [
    "address_router",
    "admin_coupon_router",
    "admin_order_router",
    "cart_router",
    "checkout_router",
    "notification_router",
    "order_router",
    "register_error_handlers",
    "routers",
    "wishlist_router",
]
