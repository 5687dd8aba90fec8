"""Wishlist management: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)


@storefront.command(part_of="Wishlist")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Wishlist)
class ManageWishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.get_or_create(command.user_id)
        wishlist.add_entry(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            discount_price=command.discount_price,
            image=command.image,
        )
        repo.add(wishlist)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.for_user(command.user_id)
        if wishlist is not None and wishlist.remove_entry(command.product_id) is not None:
            repo.add(wishlist)
