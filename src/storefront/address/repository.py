from datetime import UTC, datetime

from storefront.address.address import Address
from storefront.domain import storefront

_EPOCH = datetime.min.replace(tzinfo=UTC)


@storefront.repository(part_of=Address)
class AddressRepository:
    def for_user(self, user_id) -> list[Address]:
        """The user's saved addresses, newest first."""
        addresses = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(addresses, key=lambda a: a.created_at or _EPOCH, reverse=True)
