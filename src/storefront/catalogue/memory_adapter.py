"""In-memory catalogue for development and testing."""

from storefront.catalogue.port import CatalogueStore, ProductRecord
from storefront.errors import ProductNotFound


class InMemoryCatalogue(CatalogueStore):
    def __init__(self) -> None:
        self._products: dict[str, ProductRecord] = {}

    def add(self, product: ProductRecord) -> None:
        self._products[product.product_id] = product

    def discontinue(self, product_id: str) -> None:
        self._products.pop(product_id, None)

    def get_product(self, product_id: str) -> ProductRecord:
        try:
            return self._products[product_id]
        except KeyError:
            raise ProductNotFound(product_id) from None
