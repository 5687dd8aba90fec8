"""Cart aggregate: the per-user ledger of line items.

Each line carries a copy of the product's name, price, discount price and
image taken when it was added, so later catalogue edits never reprice a cart.
Every mutation raises an event that the change feed turns into a fresh
snapshot for the user's open cart screens.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.errors import InvalidQuantity
from storefront.shared.pricing import effective_price, subtotal


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def unit_price(self) -> float:
        return effective_price(self.price, self.discount_price)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def as_item(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "discount_price": self.discount_price,
            "image": self.image,
            "quantity": self.quantity,
        }


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def lines(self):
        """Line items in the order they were added."""
        return sorted(self.items, key=lambda i: i.added_at or datetime.min.replace(tzinfo=UTC))

    @property
    def subtotal(self) -> float:
        return subtotal(self.items)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, price, discount_price=None, image=None, quantity=1):
        """Add a product snapshot. A product can only be in the cart once."""
        if quantity < 1:
            raise InvalidQuantity(quantity)
        if self.line_for(product_id) is not None:
            raise ValidationError({"product_id": ["Product is already in the cart"]})

        now = datetime.now(UTC)
        self.add_items(
            CartLine(
                product_id=product_id,
                name=name,
                price=price,
                discount_price=discount_price,
                image=image,
                quantity=quantity,
                added_at=now,
            )
        )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                name=name,
                price=price,
                discount_price=discount_price,
                quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove the line for ``product_id``. Returns the removed line, or None if absent."""
        line = self.line_for(product_id)
        if line is None:
            return None

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )
        return line

    def set_quantity(self, product_id, quantity):
        if quantity < 1:
            raise InvalidQuantity(quantity)

        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})
        if line.quantity == quantity:
            return

        previous_quantity = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def increment(self, product_id):
        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})
        self.set_quantity(product_id, line.quantity + 1)

    def decrement(self, product_id):
        """Lower the quantity by one; at quantity 1 this does nothing."""
        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})
        if line.quantity <= 1:
            return
        self.set_quantity(product_id, line.quantity - 1)

    def clear(self):
        lines = list(self.items)
        if not lines:
            return

        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                items_removed=len(lines),
            )
        )
