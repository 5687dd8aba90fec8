"""Customer-facing messages for admin-driven order transitions."""

from storefront.order.order import OrderStatus


class StatusNoticeTemplate:
    def __init__(self, title: str, body: str) -> None:
        self.title = title
        self.body = body

    def render(self, order_id: str) -> dict:
        return {"title": self.title, "message": self.body.format(order_id=order_id)}


STATUS_NOTICES: dict[OrderStatus, StatusNoticeTemplate] = {
    OrderStatus.CANCELLED: StatusNoticeTemplate(
        "Order Cancelled",
        "Your order {order_id} has been cancelled.",
    ),
    OrderStatus.CANCEL_REJECTED: StatusNoticeTemplate(
        "Cancel Rejected",
        "Your cancellation request for order {order_id} was rejected.",
    ),
    OrderStatus.RETURN_APPROVED: StatusNoticeTemplate(
        "Return Approved",
        "Your return request for order {order_id} has been approved.",
    ),
    OrderStatus.RETURN_REJECTED: StatusNoticeTemplate(
        "Return Rejected",
        "Your return request for order {order_id} was rejected.",
    ),
}


def get_status_notice(status: OrderStatus) -> StatusNoticeTemplate | None:
    """Template for ``status``, or None when that transition is not announced."""
    return STATUS_NOTICES.get(status)
