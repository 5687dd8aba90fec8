"""Price arithmetic shared by the cart, checkout and order compiler.

Amounts are plain floats; currency and minor units are left to the catalogue.
"""

from collections.abc import Iterable


def effective_price(price: float, discount_price: float | None = None) -> float:
    """Unit price actually charged: the discount price only when it undercuts the base price."""
    if discount_price is not None and discount_price < price:
        return discount_price
    return price


def subtotal(items: Iterable) -> float:
    """Sum of effective price x quantity.

    ``items`` may be entities or dicts exposing ``price``, ``discount_price``
    and ``quantity``.
    """
    total = 0.0
    for item in items:
        if isinstance(item, dict):
            price, discount_price, quantity = item["price"], item.get("discount_price"), item["quantity"]
        else:
            price, discount_price, quantity = item.price, item.discount_price, item.quantity
        total += effective_price(price, discount_price) * quantity
    return total


def apply_discount(amount: float, discount_percent: float) -> float:
    if discount_percent and discount_percent > 0:
        return amount * (1 - discount_percent / 100)
    return amount
