from storefront.domain import storefront
from storefront.wishlist.wishlist import Wishlist


@storefront.repository(part_of=Wishlist)
class WishlistRepository:
    def for_user(self, user_id) -> Wishlist | None:
        wishlists = self._dao.query.filter(user_id=str(user_id)).all().items
        return wishlists[0] if wishlists else None

    def get_or_create(self, user_id) -> Wishlist:
        return self.for_user(user_id) or Wishlist.create(user_id=str(user_id))
