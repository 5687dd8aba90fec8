"""Read helpers over orders.

Every order is checked against the status vocabulary on the way out; a
record with an unrecognised status raises instead of being shown.
"""

from protean.utils.globals import current_domain

from storefront.errors import OrderNotFound
from storefront.order.order import Order


def _view(order) -> dict:
    order.current_status()
    return order.to_dict()


def orders_for_user(user_id) -> list[dict]:
    return [_view(o) for o in current_domain.repository_for(Order).for_user(user_id)]


def order_detail(order_id, user_id=None) -> dict:
    """One order; with ``user_id`` only that user's order is visible."""
    orders = current_domain.repository_for(Order)._dao.query.filter(id=str(order_id)).all().items
    if not orders or (user_id is not None and str(orders[0].user_id) != str(user_id)):
        raise OrderNotFound(order_id)
    return _view(orders[0])
