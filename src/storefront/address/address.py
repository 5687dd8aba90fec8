"""Address aggregate: one saved delivery address in a user's address book.

Every field is required. At checkout a saved address fills in the billing
name, phone and address lines of the order.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.address.events import AddressAdded, AddressUpdated
from storefront.domain import storefront

_FIELDS = ("name", "phone", "address", "pincode", "city", "state")


def _require_all(values: dict) -> dict:
    cleaned = {field: (values.get(field) or "").strip() for field in _FIELDS}
    missing = [field for field, value in cleaned.items() if not value]
    if missing:
        raise ValidationError({field: ["is required"] for field in missing})
    return cleaned


@storefront.aggregate
class Address:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    phone = String(required=True, max_length=30)
    address = Text(required=True)
    pincode = String(required=True, max_length=20)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id, **fields):
        values = _require_all(fields)
        now = datetime.now(UTC)
        entry = cls(user_id=user_id, created_at=now, updated_at=now, **values)
        entry.raise_(AddressAdded(address_id=str(entry.id), user_id=str(user_id), city=entry.city))
        return entry

    def update(self, **fields):
        """Replace every field at once, the way the address form saves."""
        values = _require_all(fields)
        changed = [field for field, value in values.items() if getattr(self, field) != value]
        if not changed:
            return

        for field in changed:
            setattr(self, field, values[field])
        self.updated_at = datetime.now(UTC)

        self.raise_(
            AddressUpdated(
                address_id=str(self.id),
                user_id=str(self.user_id),
                changed_fields=",".join(changed),
            )
        )

    def billing(self) -> dict:
        """Billing details for an order placed to this address."""
        return {
            "customer_name": self.name,
            "phone": self.phone,
            "address": f"{self.address}, {self.city}, {self.state} - {self.pincode}",
        }
