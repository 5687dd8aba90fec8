"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product snapshot was added to a user's cart."""

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    discount_price = Float()
    quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed, normally right after an order was placed."""

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items_removed = Integer(required=True)
