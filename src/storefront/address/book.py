"""Address book: commands, handler and queries, all scoped by user."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.domain import storefront
from storefront.errors import NotFoundError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Address")
class SaveAddress:
    user_id = Identifier(required=True)
    name = String(max_length=255)
    phone = String(max_length=30)
    address = Text()
    pincode = String(max_length=20)
    city = String(max_length=100)
    state = String(max_length=100)


@storefront.command(part_of="Address")
class UpdateAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    name = String(max_length=255)
    phone = String(max_length=30)
    address = Text()
    pincode = String(max_length=20)
    city = String(max_length=100)
    state = String(max_length=100)


@storefront.command(part_of="Address")
class DeleteAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


def _form(command) -> dict:
    return {
        "name": command.name,
        "phone": command.phone,
        "address": command.address,
        "pincode": command.pincode,
        "city": command.city,
        "state": command.state,
    }


def load_address(address_id, user_id) -> Address:
    """Fetch one of the user's addresses; someone else's address counts as missing."""
    try:
        entry = current_domain.repository_for(Address).get(address_id)
    except ObjectNotFoundError:
        entry = None
    if entry is None or str(entry.user_id) != str(user_id):
        raise NotFoundError({"address_id": [f"Address {address_id} does not exist"]})
    return entry


def list_addresses(user_id) -> list[dict]:
    return [entry.to_dict() for entry in current_domain.repository_for(Address).for_user(user_id)]


@storefront.command_handler(part_of=Address)
class AddressBookHandler:
    @handle(SaveAddress)
    def save(self, command):
        entry = Address.create(user_id=command.user_id, **_form(command))
        current_domain.repository_for(Address).add(entry)
        logger.info("Address saved", address_id=str(entry.id), user_id=command.user_id)
        return str(entry.id)

    @handle(UpdateAddress)
    def update(self, command):
        entry = load_address(command.address_id, command.user_id)
        entry.update(**_form(command))
        current_domain.repository_for(Address).add(entry)

    @handle(DeleteAddress)
    def delete(self, command):
        repo = current_domain.repository_for(Address)
        entry = load_address(command.address_id, command.user_id)
        repo._dao.delete(entry)
        logger.info("Address deleted", address_id=command.address_id, user_id=command.user_id)
