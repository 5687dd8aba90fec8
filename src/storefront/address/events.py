"""Domain events for the Address aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Address")
class AddressAdded:
    address_id = Identifier(required=True)
    user_id = Identifier(required=True)
    city = String(required=True)


@storefront.event(part_of="Address")
class AddressUpdated:
    address_id = Identifier(required=True)
    user_id = Identifier(required=True)
    changed_fields = String()  # comma-separated field names
