"""Order aggregate: an immutable purchase record with a closed status machine.

An order is compiled once at checkout from a snapshot of the cart (or a single
buy-now item) and never repriced. Afterwards only its status, the timestamp
of each transition and the cancel/return reasons change.

State Machine (9 states):
    PLACED → SHIPPED → DELIVERED
    PLACED → DELIVERED
    PLACED → CANCEL_REQUESTED → CANCELLED
    PLACED → CANCEL_REQUESTED → CANCEL_REJECTED → SHIPPED/DELIVERED
    DELIVERED → RETURN_REQUESTED → RETURN_APPROVED | RETURN_REJECTED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import (
    EmptyOrder,
    InvalidQuantity,
    InvalidTransitionError,
    MissingBillingInfo,
    UnknownOrderStatus,
)
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.pricing import apply_discount, effective_price, subtotal


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "Placed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCEL_REQUESTED = "Cancel Requested"
    CANCELLED = "Cancelled"
    CANCEL_REJECTED = "Cancel Rejected"
    RETURN_REQUESTED = "Return Requested"
    RETURN_APPROVED = "Return Approved"
    RETURN_REJECTED = "Return Rejected"


class PaymentMethod(Enum):
    COD = "COD"
    ONLINE = "Online"


class OrderSource(Enum):
    CART = "Cart"
    BUY_NOW = "BuyNow"


class Actor(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


class ActionReason(Enum):
    """Reasons a customer can give when asking to cancel or return."""

    ORDERED_BY_MISTAKE = "Ordered by mistake"
    FOUND_CHEAPER = "Found cheaper elsewhere"
    DELIVERY_TOO_LONG = "Delivery taking too long"
    CHANGED_MIND = "Changed my mind"
    OTHER = "Other"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PLACED: {
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCEL_REQUESTED,
    },
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.RETURN_REQUESTED},
    OrderStatus.CANCEL_REQUESTED: {OrderStatus.CANCELLED, OrderStatus.CANCEL_REJECTED},
    # A rejected cancellation leaves the order shippable, as if still Placed
    OrderStatus.CANCEL_REJECTED: {OrderStatus.SHIPPED, OrderStatus.DELIVERED},
    OrderStatus.RETURN_REQUESTED: {OrderStatus.RETURN_APPROVED, OrderStatus.RETURN_REJECTED},
    OrderStatus.CANCELLED: set(),  # Terminal
    OrderStatus.RETURN_APPROVED: set(),  # Terminal
    OrderStatus.RETURN_REJECTED: set(),  # Terminal
}

# Which field records the moment each status was entered
_STAMP_FIELDS = {
    OrderStatus.SHIPPED: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCEL_REQUESTED: "cancel_requested_at",
    OrderStatus.CANCELLED: "cancelled_at",
    OrderStatus.CANCEL_REJECTED: "cancel_rejected_at",
    OrderStatus.RETURN_REQUESTED: "return_requested_at",
    OrderStatus.RETURN_APPROVED: "return_approved_at",
    OrderStatus.RETURN_REJECTED: "return_rejected_at",
}


def _validate_reason(reason):
    try:
        return ActionReason(reason).value
    except ValueError:
        raise ValidationError(
            {"reason": [f"Reason must be one of: {', '.join(r.value for r in ActionReason)}"]}
        ) from None


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A product snapshot and quantity frozen into the order."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)

    @property
    def unit_price(self) -> float:
        return effective_price(self.price, self.discount_price)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=30)
    address = Text(required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    source = String(choices=OrderSource, default=OrderSource.CART.value)
    items = HasMany(OrderItem)

    subtotal = Float(required=True, min_value=0.0)
    discount_percent = Float(default=0.0)
    total_amount = Float(required=True, min_value=0.0)
    coupon_applied = Boolean(default=False)
    coupon_code = String(max_length=100)

    # Free-form at the storage layer; `current_status` enforces the vocabulary
    status = String(max_length=50, default=OrderStatus.PLACED.value)
    cancel_reason = String(max_length=100)
    return_reason = String(max_length=100)

    created_at = DateTime()
    updated_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancel_requested_at = DateTime()
    cancelled_at = DateTime()
    cancel_rejected_at = DateTime()
    return_requested_at = DateTime()
    return_approved_at = DateTime()
    return_rejected_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        customer_name,
        phone,
        address,
        payment_method,
        items,
        discount_percent=0.0,
        coupon_code=None,
        source=OrderSource.CART.value,
    ):
        """Compile a new order in PLACED status.

        Args:
            items: list of dicts with product_id, name, price, discount_price,
                   image and quantity, copied as-is into the order.
            discount_percent: coupon percentage already granted at checkout;
                              0 when no coupon was applied.

        The total is the sum of effective price x quantity, reduced by
        ``discount_percent``. It is computed here once and stored.
        """
        billing = {"customer_name": customer_name, "phone": phone, "address": address}
        missing = [field for field, value in billing.items() if not (value or "").strip()]
        if missing:
            raise MissingBillingInfo(missing)

        if not items:
            raise EmptyOrder()
        for item in items:
            quantity = item.get("quantity")
            if quantity is None or (isinstance(quantity, (int, float)) and quantity < 1):
                raise InvalidQuantity(quantity)

        # Field validation on the entities rejects missing or non-numeric prices
        order_items = [
            OrderItem(
                product_id=item.get("product_id"),
                name=item.get("name"),
                price=item.get("price"),
                discount_price=item.get("discount_price"),
                image=item.get("image"),
                quantity=item["quantity"],
            )
            for item in items
        ]

        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError(
                {"payment_method": [f"Payment method must be one of: {', '.join(m.value for m in PaymentMethod)}"]}
            ) from None

        discount_percent = discount_percent or 0.0
        order_subtotal = subtotal(order_items)
        total_amount = apply_discount(order_subtotal, discount_percent)
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            customer_name=customer_name.strip(),
            phone=phone.strip(),
            address=address.strip(),
            payment_method=method.value,
            source=source,
            items=order_items,
            subtotal=order_subtotal,
            discount_percent=discount_percent,
            total_amount=total_amount,
            coupon_applied=discount_percent > 0,
            coupon_code=coupon_code,
            status=OrderStatus.PLACED.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                customer_name=order.customer_name,
                payment_method=order.payment_method,
                source=source,
                item_count=len(items),
                subtotal=order_subtotal,
                discount_percent=discount_percent,
                total_amount=total_amount,
                coupon_applied=order.coupon_applied,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def current_status(self) -> OrderStatus:
        """The status as an enum member.

        Raises:
            UnknownOrderStatus: the stored value is not part of the vocabulary.
        """
        try:
            return OrderStatus(self.status)
        except ValueError:
            raise UnknownOrderStatus(str(self.id), self.status) from None

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS[self.current_status()]

    def _transition(self, target_status, actor, reason=None):
        current = self.current_status()
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransitionError(current.value, target_status.value)

        now = datetime.now(UTC)
        self.status = target_status.value
        setattr(self, _STAMP_FIELDS[target_status], now)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                new_status=target_status.value,
                actor=actor.value,
                reason=reason,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Customer requests
    # -------------------------------------------------------------------
    def request_cancellation(self, reason):
        """Ask for cancellation. Only an order that is exactly PLACED qualifies."""
        reason = _validate_reason(reason)
        self._transition(OrderStatus.CANCEL_REQUESTED, Actor.CUSTOMER, reason)
        self.cancel_reason = reason

    def request_return(self, reason):
        """Ask for a return. Only a DELIVERED order qualifies."""
        reason = _validate_reason(reason)
        self._transition(OrderStatus.RETURN_REQUESTED, Actor.CUSTOMER, reason)
        self.return_reason = reason

    # -------------------------------------------------------------------
    # Admin transitions
    # -------------------------------------------------------------------
    def ship(self):
        self._transition(OrderStatus.SHIPPED, Actor.ADMIN)

    def deliver(self):
        self._transition(OrderStatus.DELIVERED, Actor.ADMIN)

    def approve_cancellation(self):
        self._transition(OrderStatus.CANCELLED, Actor.ADMIN)

    def reject_cancellation(self):
        self._transition(OrderStatus.CANCEL_REJECTED, Actor.ADMIN)

    def approve_return(self):
        self._transition(OrderStatus.RETURN_APPROVED, Actor.ADMIN)

    def reject_return(self):
        self._transition(OrderStatus.RETURN_REJECTED, Actor.ADMIN)
