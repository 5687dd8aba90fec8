"""Domain events for the Wishlist aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Wishlist")
class WishlistItemAdded:
    wishlist_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True)


@storefront.event(part_of="Wishlist")
class WishlistItemRemoved:
    wishlist_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
