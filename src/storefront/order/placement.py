"""Order placement: compile a checkout into a stored order.

A cart order is compiled from the user's cart ledger, never from items the
caller supplies. The order is written before the cart is touched and the cart
is emptied in the same unit of work, so a failed order write leaves the cart
exactly as it was. Buy-now orders carry their single item and leave the cart
alone.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order, OrderSource

logger = structlog.get_logger(__name__)


def place_order(
    user_id,
    customer_name,
    phone,
    address,
    payment_method,
    items=None,
    discount_percent=0.0,
    coupon_code=None,
    source=OrderSource.CART.value,
) -> Order:
    """Compile, store and return a new order.

    ``items`` is only read for buy-now orders. Must run inside a unit of work;
    callers are command handlers.
    """
    cart_repo = current_domain.repository_for(Cart)
    cart = None
    if source == OrderSource.CART.value:
        if items:
            raise ValidationError({"items": ["Cart orders take their items from the cart"]})
        cart = cart_repo.for_user(user_id)
        items = [line.as_item() for line in cart.lines()] if cart else []

    order = Order.place(
        user_id=str(user_id),
        customer_name=customer_name,
        phone=phone,
        address=address,
        payment_method=payment_method,
        items=items or [],
        discount_percent=discount_percent,
        coupon_code=coupon_code,
        source=source,
    )
    current_domain.repository_for(Order).add(order)

    if cart is not None:
        cart.clear()
        cart_repo.add(cart)

    logger.info(
        "Order placed",
        order_id=str(order.id),
        user_id=str(user_id),
        source=source,
        total_amount=order.total_amount,
    )
    return order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    customer_name = String(max_length=255)
    phone = String(max_length=30)
    address = Text()
    payment_method = String(required=True, max_length=20)
    items = Text()  # JSON list of item snapshot dicts; buy-now orders only
    discount_percent = Float(default=0.0)
    coupon_code = String(max_length=100)
    source = String(max_length=20, default=OrderSource.CART.value)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) and command.items else command.items
        order = place_order(
            user_id=command.user_id,
            customer_name=command.customer_name or "",
            phone=command.phone or "",
            address=command.address or "",
            payment_method=command.payment_method,
            items=items,
            discount_percent=command.discount_percent or 0.0,
            coupon_code=command.coupon_code,
            source=command.source or OrderSource.CART.value,
        )
        return str(order.id)
