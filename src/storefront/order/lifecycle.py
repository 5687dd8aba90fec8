"""Order lifecycle: customer requests and admin transitions.

Customers can ask to cancel a placed order or return a delivered one; they
only ever see their own orders. Admins move orders along the status machine
and settle those requests. Settling a request leaves a note in the
customer's inbox.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import OrderNotFound
from storefront.notification.sink import notify
from storefront.notification.templates import get_status_notice
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Customer commands
# ---------------------------------------------------------------------------
@storefront.command(part_of="Order")
class RequestCancellation:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    reason = String(required=True, max_length=100)


@storefront.command(part_of="Order")
class RequestReturn:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    reason = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Admin commands
# ---------------------------------------------------------------------------
@storefront.command(part_of="Order")
class ShipOrder:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class DeliverOrder:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class ApproveCancellation:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class RejectCancellation:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class ApproveReturn:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class RejectReturn:
    order_id = Identifier(required=True)


def _load(order_id, user_id=None) -> Order:
    """Fetch an order, hiding orders that belong to someone else."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None
    if user_id is not None and str(order.user_id) != str(user_id):
        raise OrderNotFound(order_id)
    return order


@storefront.command_handler(part_of=Order)
class CustomerRequestsHandler:
    @handle(RequestCancellation)
    def request_cancellation(self, command):
        order = _load(command.order_id, command.user_id)
        order.request_cancellation(command.reason)
        current_domain.repository_for(Order).add(order)

    @handle(RequestReturn)
    def request_return(self, command):
        order = _load(command.order_id, command.user_id)
        order.request_return(command.reason)
        current_domain.repository_for(Order).add(order)


@storefront.command_handler(part_of=Order)
class AdminTransitionsHandler:
    def _apply(self, order_id, action):
        order = _load(order_id)
        previous = order.status
        getattr(order, action)()
        current_domain.repository_for(Order).add(order)

        logger.info("Order status changed", order_id=str(order.id), previous_status=previous, new_status=order.status)

        notice = get_status_notice(order.current_status())
        if notice is not None:
            notify(order.user_id, **notice.render(str(order.id)))

    @handle(ShipOrder)
    def ship(self, command):
        self._apply(command.order_id, "ship")

    @handle(DeliverOrder)
    def deliver(self, command):
        self._apply(command.order_id, "deliver")

    @handle(ApproveCancellation)
    def approve_cancellation(self, command):
        self._apply(command.order_id, "approve_cancellation")

    @handle(RejectCancellation)
    def reject_cancellation(self, command):
        self._apply(command.order_id, "reject_cancellation")

    @handle(ApproveReturn)
    def approve_return(self, command):
        self._apply(command.order_id, "approve_return")

    @handle(RejectReturn)
    def reject_return(self, command):
        self._apply(command.order_id, "reject_return")
