"""Coupon administration: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=100)
    discount = Float(required=True)


@storefront.command(part_of="Coupon")
class SetCouponActive:
    coupon_id = Identifier(required=True)
    active = Boolean(required=True)


@storefront.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id = Identifier(required=True)


@storefront.command_handler(part_of=Coupon)
class ManageCouponsHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = Coupon.create(code=command.code, discount=command.discount)
        if repo.find_by_code(coupon.code) is not None:
            raise ValidationError({"code": [f"Coupon {coupon.code} already exists"]})
        repo.add(coupon)
        logger.info("Coupon created", code=coupon.code, discount=coupon.discount)
        return str(coupon.id)

    @handle(SetCouponActive)
    def set_active(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        coupon.set_active(command.active)
        repo.add(coupon)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        repo._dao.delete(coupon)
        logger.info("Coupon deleted", code=coupon.code)
