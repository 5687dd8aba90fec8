from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import storefront


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code) -> Coupon | None:
        coupons = self._dao.query.filter(code=normalize_code(code)).all().items
        return coupons[0] if coupons else None

    def find_active(self, code) -> Coupon | None:
        coupons = self._dao.query.filter(code=normalize_code(code), active=True).all().items
        return coupons[0] if coupons else None

    def all_coupons(self) -> list[Coupon]:
        return self._dao.query.all().items
