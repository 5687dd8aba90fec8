"""Wishlist aggregate: products a user saved for later, one entry per product."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String

from storefront.domain import storefront
from storefront.wishlist.events import WishlistItemAdded, WishlistItemRemoved


@storefront.entity(part_of="Wishlist")
class WishlistEntry:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)
    added_at = DateTime()

    def as_item(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "discount_price": self.discount_price,
            "image": self.image,
        }


@storefront.aggregate
class Wishlist:
    user_id = Identifier(required=True)
    entries = HasMany(WishlistEntry)
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    def entry_for(self, product_id):
        return next((e for e in self.entries if str(e.product_id) == str(product_id)), None)

    def ordered_entries(self):
        return sorted(self.entries, key=lambda e: e.added_at or datetime.min.replace(tzinfo=UTC))

    def add_entry(self, product_id, name, price, discount_price=None, image=None):
        if self.entry_for(product_id) is not None:
            raise ValidationError({"product_id": ["Product is already in the wishlist"]})

        now = datetime.now(UTC)
        self.add_entries(
            WishlistEntry(
                product_id=product_id,
                name=name,
                price=price,
                discount_price=discount_price,
                image=image,
                added_at=now,
            )
        )
        self.updated_at = now

        self.raise_(
            WishlistItemAdded(
                wishlist_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                name=name,
            )
        )

    def remove_entry(self, product_id):
        """Remove and return the entry for ``product_id``; None if it was not saved."""
        entry = self.entry_for(product_id)
        if entry is None:
            return None

        self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            WishlistItemRemoved(
                wishlist_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )
        return entry
