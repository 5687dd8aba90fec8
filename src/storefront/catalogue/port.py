"""Catalogue port: read-only access to product records.

The catalogue is owned by the admin app; the storefront only reads it to take
snapshots of products when they are added to a cart or wishlist.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductRecord:
    """A product as the catalogue currently lists it."""

    product_id: str
    name: str
    price: float
    discount_price: float | None = None
    image: str | None = None
    category: str | None = None
    subcategory: str | None = None
    catalogue: str | None = None
    description: str | None = None

    def snapshot(self) -> dict:
        """Fields copied into carts, wishlists and orders."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "discount_price": self.discount_price,
            "image": self.image,
        }


class CatalogueStore(ABC):
    """Abstract catalogue interface."""

    @abstractmethod
    def get_product(self, product_id: str) -> ProductRecord:
        """Return the product or raise ``ProductNotFound``."""
        ...
