"""Checkout session: commands and handler.

The coupon check comes before any pricing: a checkout that already carries
a coupon refuses a second one even if the new code is unknown.

Completing a checkout with ``address_id`` bills to that saved address; any
billing field typed on the order screen takes precedence over the saved one.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.address.book import load_address
from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout
from storefront.coupon.validation import apply_coupon
from storefront.domain import storefront
from storefront.errors import CouponAlreadyApplied, NotFoundError
from storefront.order.placement import place_order
from storefront.shared.pricing import subtotal

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Checkout")
class StartCheckout:
    user_id = Identifier(required=True)
    buy_now = Text()  # JSON: product snapshot dict with quantity


@storefront.command(part_of="Checkout")
class ApplyCheckoutCoupon:
    user_id = Identifier(required=True)
    checkout_id = Identifier(required=True)
    code = String(max_length=100)


@storefront.command(part_of="Checkout")
class SetBuyNowQuantity:
    user_id = Identifier(required=True)
    checkout_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Checkout")
class CompleteCheckout:
    user_id = Identifier(required=True)
    checkout_id = Identifier(required=True)
    address_id = Identifier()
    customer_name = String(max_length=255)
    phone = String(max_length=30)
    address = Text()
    payment_method = String(required=True, max_length=20)


def checkout_items(checkout) -> list[dict]:
    """Item snapshots the checkout would turn into an order right now."""
    if checkout.is_buy_now:
        return [checkout.buy_now_item.as_item()]
    cart = current_domain.repository_for(Cart).for_user(checkout.user_id)
    return [line.as_item() for line in cart.lines()] if cart else []


def load_checkout(checkout_id, user_id) -> Checkout:
    try:
        checkout = current_domain.repository_for(Checkout).get(checkout_id)
    except ObjectNotFoundError:
        checkout = None
    if checkout is None or str(checkout.user_id) != str(user_id):
        raise NotFoundError({"checkout_id": [f"Checkout {checkout_id} does not exist"]})
    return checkout


@storefront.command_handler(part_of=Checkout)
class CheckoutHandler:
    @handle(StartCheckout)
    def start(self, command):
        buy_now = json.loads(command.buy_now) if isinstance(command.buy_now, str) else command.buy_now
        checkout = Checkout.start(user_id=command.user_id, buy_now=buy_now)
        current_domain.repository_for(Checkout).add(checkout)
        return str(checkout.id)

    @handle(ApplyCheckoutCoupon)
    def apply_coupon(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = load_checkout(command.checkout_id, command.user_id)
        if checkout.coupon_code:
            raise CouponAlreadyApplied(checkout.coupon_code)

        current_total = subtotal(checkout_items(checkout))
        quote = apply_coupon(command.code or "", current_total)

        checkout.apply_coupon(quote.code, quote.discount_percent)
        repo.add(checkout)
        logger.info("Coupon applied", checkout_id=str(checkout.id), code=quote.code)
        return quote

    @handle(SetBuyNowQuantity)
    def set_quantity(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = load_checkout(command.checkout_id, command.user_id)
        checkout.set_buy_now_quantity(command.quantity)
        repo.add(checkout)

    @handle(CompleteCheckout)
    def complete(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = load_checkout(command.checkout_id, command.user_id)
        checkout.ensure_open()

        billing = {
            "customer_name": command.customer_name or "",
            "phone": command.phone or "",
            "address": command.address or "",
        }
        if command.address_id:
            saved = load_address(command.address_id, command.user_id).billing()
            billing = {field: value.strip() or saved[field] for field, value in billing.items()}

        order = place_order(
            user_id=checkout.user_id,
            payment_method=command.payment_method,
            items=[checkout.buy_now_item.as_item()] if checkout.is_buy_now else None,
            discount_percent=checkout.discount_percent or 0.0,
            coupon_code=checkout.coupon_code,
            source=checkout.source,
            **billing,
        )

        checkout.complete(order.id)
        repo.add(checkout)
        return str(order.id)
