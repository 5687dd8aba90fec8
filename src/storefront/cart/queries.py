"""Read helpers over a user's cart."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart


def list_cart_items(user_id) -> list:
    """Line items of the user's cart in insertion order."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    return cart.lines() if cart else []


def cart_snapshot(user_id) -> list[dict]:
    return [line.as_item() for line in list_cart_items(user_id)]


def cart_total(user_id) -> float:
    cart = current_domain.repository_for(Cart).for_user(user_id)
    return cart.subtotal if cart else 0.0
