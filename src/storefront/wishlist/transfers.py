"""Moving products between the cart and the wishlist.

Both sides are written in the same unit of work, so a product never ends up
in both places or in neither.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class MoveWishlistItemToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class MoveCartItemToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Wishlist)
class TransferHandler:
    @handle(MoveWishlistItemToCart)
    def move_to_cart(self, command):
        wishlist_repo = current_domain.repository_for(Wishlist)
        cart_repo = current_domain.repository_for(Cart)

        wishlist = wishlist_repo.for_user(command.user_id)
        entry = wishlist.entry_for(command.product_id) if wishlist else None
        if entry is None:
            raise ValidationError({"product_id": ["Product is not in the wishlist"]})

        cart = cart_repo.get_or_create(command.user_id)
        if cart.line_for(command.product_id) is None:
            cart.add_item(
                product_id=entry.product_id,
                name=entry.name,
                price=entry.price,
                discount_price=entry.discount_price,
                image=entry.image,
                quantity=1,
            )
            cart_repo.add(cart)

        wishlist.remove_entry(command.product_id)
        wishlist_repo.add(wishlist)

    @handle(MoveCartItemToWishlist)
    def move_to_wishlist(self, command):
        cart_repo = current_domain.repository_for(Cart)
        wishlist_repo = current_domain.repository_for(Wishlist)

        cart = cart_repo.for_user(command.user_id)
        line = cart.line_for(command.product_id) if cart else None
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        wishlist = wishlist_repo.get_or_create(command.user_id)
        if wishlist.entry_for(command.product_id) is None:
            wishlist.add_entry(
                product_id=line.product_id,
                name=line.name,
                price=line.price,
                discount_price=line.discount_price,
                image=line.image,
            )
            wishlist_repo.add(wishlist)

        cart.remove_item(command.product_id)
        cart_repo.add(cart)
