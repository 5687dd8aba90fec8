"""Repository for the Cart aggregate: every lookup is scoped by user."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def get_or_create(self, user_id) -> Cart:
        return self.for_user(user_id) or Cart.create(user_id=str(user_id))
