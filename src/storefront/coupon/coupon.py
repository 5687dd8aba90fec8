"""Coupon aggregate: a percentage discount unlocked by a code.

Codes are stored trimmed and uppercased; lookups normalise user input the same
way, which makes matching case-insensitive.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String

from storefront.coupon.events import CouponActivationChanged, CouponCreated
from storefront.domain import storefront


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


@storefront.aggregate
class Coupon:
    code = String(required=True, max_length=100)
    discount = Float(required=True)
    active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def discount_must_be_a_percentage(self):
        if self.discount is None or not 0 < self.discount <= 100:
            raise ValidationError({"discount": ["Discount must be greater than 0 and at most 100"]})

    @classmethod
    def create(cls, code, discount):
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError({"code": ["Coupon code is required"]})

        now = datetime.now(UTC)
        coupon = cls(code=normalized, discount=discount, active=True, created_at=now, updated_at=now)
        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=coupon.code,
                discount=coupon.discount,
            )
        )
        return coupon

    def set_active(self, active: bool):
        if self.active == active:
            return
        self.active = active
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CouponActivationChanged(
                coupon_id=str(self.id),
                code=self.code,
                active=active,
            )
        )
