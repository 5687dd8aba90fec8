"""Coupon validator: looks up a code and prices the reduction.

The validator holds no state. Refusing a second coupon in the same checkout is
the checkout session's job.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon, normalize_code
from storefront.errors import CouponNotFound
from storefront.shared.pricing import apply_discount


@dataclass(frozen=True)
class CouponQuote:
    code: str
    discount_percent: float
    new_total: float


def apply_coupon(code: str, current_total: float) -> CouponQuote:
    """Match ``code`` against active coupons and discount ``current_total``.

    Raises:
        ValidationError: the code is blank.
        CouponNotFound: no active coupon carries this code.
    """
    normalized = normalize_code(code)
    if not normalized:
        raise ValidationError({"coupon_code": ["Enter a coupon code"]})

    coupon = current_domain.repository_for(Coupon).find_active(normalized)
    if coupon is None:
        raise CouponNotFound(normalized)

    return CouponQuote(
        code=coupon.code,
        discount_percent=coupon.discount,
        new_total=apply_discount(current_total, coupon.discount),
    )
