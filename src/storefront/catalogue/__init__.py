"""Catalogue store factory.

Provides get_catalogue() / set_catalogue() to swap implementations.
"""

from storefront.catalogue.memory_adapter import InMemoryCatalogue
from storefront.catalogue.port import CatalogueStore

_current_catalogue: CatalogueStore | None = None


def get_catalogue() -> CatalogueStore:
    """Return the current catalogue store. Defaults to InMemoryCatalogue."""
    global _current_catalogue
    if _current_catalogue is None:
        _current_catalogue = InMemoryCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: CatalogueStore) -> None:
    """Override the active catalogue store (useful for tests)."""
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    """Reset to default catalogue store."""
    global _current_catalogue
    _current_catalogue = None
