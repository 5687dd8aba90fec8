"""Admin order board: every order with its current status.

This is the read model behind the admin order list and the admin order feed.
The projector pushes the board topic itself once a row is written, so a
watching screen never reloads ahead of the row it is waiting for.
"""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import UnknownOrderStatus
from storefront.feeds import ORDER_BOARD, get_feed
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus


@storefront.projection
class OrderBoard:
    order_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    customer_name = String(max_length=255)
    status = String(required=True, max_length=50)
    total_amount = Float()
    item_count = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()


@storefront.projector(projector_for=OrderBoard, aggregates=[Order])
class OrderBoardProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderBoard).add(
            OrderBoard(
                order_id=event.order_id,
                user_id=event.user_id,
                customer_name=event.customer_name,
                status="Placed",
                total_amount=event.total_amount,
                item_count=event.item_count,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )
        get_feed().publish(ORDER_BOARD, str(event.user_id))

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        repo = current_domain.repository_for(OrderBoard)
        row = repo.get(event.order_id)
        row.status = event.new_status
        row.updated_at = event.changed_at
        repo.add(row)
        get_feed().publish(ORDER_BOARD, str(event.user_id))


def board(status=None) -> list[OrderBoard]:
    """Rows of the board, newest first."""
    query = current_domain.repository_for(OrderBoard)._dao.query
    if status is not None:
        query = query.filter(status=status)
    return sorted(query.all().items, key=lambda row: row.created_at, reverse=True)


def board_rows(status=None) -> list[dict]:
    """The board as plain dicts.

    Raises:
        UnknownOrderStatus: a row carries a status outside the vocabulary.
    """
    rows = []
    for row in board(status=status):
        try:
            OrderStatus(row.status)
        except ValueError:
            raise UnknownOrderStatus(str(row.order_id), row.status) from None
        rows.append(row.to_dict())
    return rows
