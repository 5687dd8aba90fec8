"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A new order was compiled at checkout."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    customer_name = String(required=True)
    payment_method = String(required=True)
    source = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    discount_percent = Float(default=0.0)
    total_amount = Float(required=True)
    coupon_applied = Boolean(default=False)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The order moved along its lifecycle, by the customer or the admin."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    actor = String(required=True)
    reason = String()
    changed_at = DateTime(required=True)
