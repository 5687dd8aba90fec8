"""Checkout aggregate: one pass through the order screen.

A checkout either takes everything in the user's cart or a single buy-now
product that never touches the cart. It holds at most one coupon; the
percentage is kept so the total can be recomputed against whatever the
items cost at the moment the order is placed.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, ValueObject

from storefront.checkout.events import CheckoutCompleted, CheckoutCouponApplied, CheckoutStarted
from storefront.domain import storefront
from storefront.errors import CouponAlreadyApplied, InvalidQuantity
from storefront.order.order import OrderSource
from storefront.shared.pricing import effective_price


class CheckoutStatus(Enum):
    OPEN = "Open"
    COMPLETED = "Completed"


@storefront.value_object(part_of="Checkout")
class BuyNowItem:
    """The single product bought directly from its detail page."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)

    def as_item(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "discount_price": self.discount_price,
            "image": self.image,
            "quantity": self.quantity,
        }

    @property
    def line_total(self) -> float:
        return effective_price(self.price, self.discount_price) * self.quantity


@storefront.aggregate
class Checkout:
    user_id = Identifier(required=True)
    source = String(choices=OrderSource, default=OrderSource.CART.value)
    buy_now_item = ValueObject(BuyNowItem)
    coupon_code = String(max_length=100)
    discount_percent = Float(default=0.0)
    status = String(choices=CheckoutStatus, default=CheckoutStatus.OPEN.value)
    order_id = Identifier()
    created_at = DateTime()
    completed_at = DateTime()

    @classmethod
    def start(cls, user_id, buy_now=None):
        """Open a checkout over the cart, or over ``buy_now`` (a product snapshot dict) when given."""
        now = datetime.now(UTC)
        if buy_now:
            quantity = buy_now.get("quantity") or 1
            if quantity < 1:
                raise InvalidQuantity(quantity)
            checkout = cls(
                user_id=user_id,
                source=OrderSource.BUY_NOW.value,
                buy_now_item=BuyNowItem(
                    product_id=buy_now["product_id"],
                    name=buy_now["name"],
                    price=buy_now["price"],
                    discount_price=buy_now.get("discount_price"),
                    image=buy_now.get("image"),
                    quantity=quantity,
                ),
                created_at=now,
            )
        else:
            checkout = cls(user_id=user_id, source=OrderSource.CART.value, created_at=now)

        checkout.raise_(
            CheckoutStarted(
                checkout_id=str(checkout.id),
                user_id=str(user_id),
                source=checkout.source,
                started_at=now,
            )
        )
        return checkout

    @property
    def is_buy_now(self) -> bool:
        return self.source == OrderSource.BUY_NOW.value

    def ensure_open(self):
        if self.status != CheckoutStatus.OPEN.value:
            raise ValidationError({"checkout_id": ["Checkout is already completed"]})

    def apply_coupon(self, code, discount_percent):
        """Record the coupon. A checkout accepts exactly one."""
        self.ensure_open()
        if self.coupon_code:
            raise CouponAlreadyApplied(self.coupon_code)

        self.coupon_code = code
        self.discount_percent = discount_percent
        self.raise_(
            CheckoutCouponApplied(
                checkout_id=str(self.id),
                user_id=str(self.user_id),
                coupon_code=code,
                discount_percent=discount_percent,
            )
        )

    def set_buy_now_quantity(self, quantity):
        self.ensure_open()
        if not self.is_buy_now:
            raise ValidationError({"source": ["Quantity can only be changed on a buy-now checkout"]})
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity)

        item = self.buy_now_item
        self.buy_now_item = BuyNowItem(
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            discount_price=item.discount_price,
            image=item.image,
            quantity=quantity,
        )

    def complete(self, order_id):
        self.ensure_open()
        now = datetime.now(UTC)
        self.status = CheckoutStatus.COMPLETED.value
        self.order_id = order_id
        self.completed_at = now
        self.raise_(
            CheckoutCompleted(
                checkout_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id),
                completed_at=now,
            )
        )
