"""Cart item management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    image = String(max_length=1000)
    quantity = Integer(default=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class SetCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class IncrementCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class DecrementCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.add_item(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            discount_price=command.discount_price,
            image=command.image,
            quantity=command.quantity if command.quantity is not None else 1,
        )
        repo.add(cart)
        logger.info("Added to cart", user_id=command.user_id, product_id=command.product_id)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is not None and cart.remove_item(command.product_id) is not None:
            repo.add(cart)

    @handle(SetCartQuantity)
    def set_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.set_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(IncrementCartItem)
    def increment(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.increment(command.product_id)
        repo.add(cart)

    @handle(DecrementCartItem)
    def decrement(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.decrement(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is not None:
            cart.clear()
            repo.add(cart)
