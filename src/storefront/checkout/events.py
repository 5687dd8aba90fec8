"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Checkout")
class CheckoutStarted:
    checkout_id = Identifier(required=True)
    user_id = Identifier(required=True)
    source = String(required=True)
    started_at = DateTime(required=True)


@storefront.event(part_of="Checkout")
class CheckoutCouponApplied:
    checkout_id = Identifier(required=True)
    user_id = Identifier(required=True)
    coupon_code = String(required=True)
    discount_percent = Float(required=True)


@storefront.event(part_of="Checkout")
class CheckoutCompleted:
    checkout_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    completed_at = DateTime(required=True)
