"""Application tests for coupon administration and the coupon validator."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.coupon.coupon import Coupon
from storefront.coupon.management import CreateCoupon, DeleteCoupon, SetCouponActive
from storefront.coupon.validation import apply_coupon
from storefront.errors import CouponNotFound


def _create(code="SAVE10", discount=10):
    return current_domain.process(CreateCoupon(code=code, discount=discount), asynchronous=False)


class TestCouponAdmin:
    def test_create(self):
        coupon_id = _create(code="welcome15", discount=15)
        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        assert coupon.code == "WELCOME15"
        assert coupon.active is True

    def test_duplicate_code_is_rejected(self):
        _create()
        with pytest.raises(ValidationError):
            _create(code="save10", discount=20)

    def test_toggle_active(self):
        coupon_id = _create()
        current_domain.process(SetCouponActive(coupon_id=coupon_id, active=False), asynchronous=False)
        assert current_domain.repository_for(Coupon).get(coupon_id).active is False

        current_domain.process(SetCouponActive(coupon_id=coupon_id, active=True), asynchronous=False)
        assert current_domain.repository_for(Coupon).get(coupon_id).active is True

    def test_delete(self):
        coupon_id = _create()
        current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Coupon).get(coupon_id)


class TestApplyCoupon:
    def test_match_is_case_insensitive(self):
        _create()
        quote = apply_coupon("Save10", 1250)
        assert quote.code == "SAVE10"
        assert quote.new_total == pytest.approx(1125.0)

    def test_unknown_code(self):
        with pytest.raises(CouponNotFound) as exc:
            apply_coupon(" xyz123 ", 1250)
        assert exc.value.messages == {"coupon_code": ["No active coupon matches 'XYZ123'"]}

    def test_deleted_coupon_no_longer_applies(self):
        coupon_id = _create()
        current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
        with pytest.raises(CouponNotFound):
            apply_coupon("SAVE10", 1250)
