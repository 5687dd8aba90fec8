"""Repository for the Order aggregate."""

from datetime import UTC, datetime

from storefront.domain import storefront
from storefront.order.order import Order

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at or _EPOCH, reverse=True)


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """The user's orders, most recent first."""
        return _newest_first(self._dao.query.filter(user_id=str(user_id)).all().items)
