"""Domain events for the Coupon aggregate."""

from protean.fields import Boolean, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount = Float(required=True)


@storefront.event(part_of="Coupon")
class CouponActivationChanged:
    coupon_id = Identifier(required=True)
    code = String(required=True)
    active = Boolean(required=True)
