"""FastAPI routes for the storefront: customer screens and admin screens."""

import json

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.address.book import DeleteAddress, SaveAddress, UpdateAddress, list_addresses
from storefront.api.auth import current_user, verified_admin
from storefront.api.schemas import (
    AddressIdResponse,
    AddressRequest,
    AddressSchema,
    AddToCartRequest,
    AddToWishlistRequest,
    ApplyCouponRequest,
    CartIdResponse,
    CartResponse,
    CheckoutResponse,
    CompleteCheckoutRequest,
    CouponIdResponse,
    CouponQuoteResponse,
    CouponSchema,
    CreateCouponRequest,
    InboxResponse,
    OrderIdResponse,
    ReasonRequest,
    SetCouponActiveRequest,
    SetOrderStatusRequest,
    SetQuantityRequest,
    StartCheckoutRequest,
    StatusResponse,
    WishlistResponse,
)
from storefront.cart.items import (
    AddToCart,
    DecrementCartItem,
    IncrementCartItem,
    RemoveFromCart,
    SetCartQuantity,
)
from storefront.cart.queries import cart_snapshot, cart_total
from storefront.catalogue import get_catalogue
from storefront.checkout.checkout import Checkout
from storefront.checkout.session import (
    ApplyCheckoutCoupon,
    CompleteCheckout,
    SetBuyNowQuantity,
    StartCheckout,
    checkout_items,
    load_checkout,
)
from storefront.coupon.coupon import Coupon
from storefront.coupon.management import CreateCoupon, DeleteCoupon, SetCouponActive
from storefront.identity.port import AuthenticatedUser
from storefront.notification.inbox import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    list_notifications,
    unread_count,
)
from storefront.order.lifecycle import (
    ApproveCancellation,
    ApproveReturn,
    DeliverOrder,
    RejectCancellation,
    RejectReturn,
    RequestCancellation,
    RequestReturn,
    ShipOrder,
)
from storefront.order.order import OrderStatus
from storefront.order.queries import order_detail, orders_for_user
from storefront.projections.order_board import board_rows
from storefront.shared.pricing import apply_discount, subtotal
from storefront.wishlist.entries import AddToWishlist, RemoveFromWishlist
from storefront.wishlist.queries import wishlist_snapshot
from storefront.wishlist.transfers import MoveCartItemToWishlist, MoveWishlistItemToCart

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(user_id) -> CartResponse:
    return CartResponse(items=cart_snapshot(user_id), total=cart_total(user_id))


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    return _cart_response(user.user_id)


@cart_router.post("/items", status_code=201, response_model=CartIdResponse)
async def add_to_cart(body: AddToCartRequest, user: AuthenticatedUser = Depends(current_user)) -> CartIdResponse:
    product = get_catalogue().get_product(body.product_id)
    command = AddToCart(user_id=user.user_id, quantity=body.quantity, **product.snapshot())
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def set_cart_quantity(
    product_id: str, body: SetQuantityRequest, user: AuthenticatedUser = Depends(current_user)
) -> CartResponse:
    command = SetCartQuantity(user_id=user.user_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user.user_id)


@cart_router.post("/items/{product_id}/increment", response_model=CartResponse)
async def increment_cart_item(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    current_domain.process(IncrementCartItem(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return _cart_response(user.user_id)


@cart_router.post("/items/{product_id}/decrement", response_model=CartResponse)
async def decrement_cart_item(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    current_domain.process(DecrementCartItem(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return _cart_response(user.user_id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return _cart_response(user.user_id)


@cart_router.post("/items/{product_id}/move-to-wishlist", response_model=StatusResponse)
async def move_to_wishlist(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(MoveCartItemToWishlist(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("", response_model=WishlistResponse)
async def get_wishlist(user: AuthenticatedUser = Depends(current_user)) -> WishlistResponse:
    return WishlistResponse(items=wishlist_snapshot(user.user_id))


@wishlist_router.post("/items", status_code=201, response_model=StatusResponse)
async def add_to_wishlist(
    body: AddToWishlistRequest, user: AuthenticatedUser = Depends(current_user)
) -> StatusResponse:
    product = get_catalogue().get_product(body.product_id)
    current_domain.process(AddToWishlist(user_id=user.user_id, **product.snapshot()), asynchronous=False)
    return StatusResponse()


@wishlist_router.delete("/items/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


@wishlist_router.post("/items/{product_id}/move-to-cart", response_model=StatusResponse)
async def move_to_cart(product_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(MoveWishlistItemToCart(user_id=user.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


def _checkout_response(checkout: Checkout) -> CheckoutResponse:
    items = checkout_items(checkout)
    amount = subtotal(items)
    return CheckoutResponse(
        checkout_id=str(checkout.id),
        source=checkout.source,
        items=items,
        subtotal=amount,
        coupon_code=checkout.coupon_code,
        discount_percent=checkout.discount_percent or 0.0,
        total=apply_discount(amount, checkout.discount_percent or 0.0),
    )


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def start_checkout(
    body: StartCheckoutRequest, user: AuthenticatedUser = Depends(current_user)
) -> CheckoutResponse:
    buy_now = None
    if body.buy_now is not None:
        product = get_catalogue().get_product(body.buy_now.product_id)
        buy_now = json.dumps({**product.snapshot(), "quantity": body.buy_now.quantity})

    checkout_id = current_domain.process(StartCheckout(user_id=user.user_id, buy_now=buy_now), asynchronous=False)
    return _checkout_response(load_checkout(checkout_id, user.user_id))


@checkout_router.get("/{checkout_id}", response_model=CheckoutResponse)
async def get_checkout(checkout_id: str, user: AuthenticatedUser = Depends(current_user)) -> CheckoutResponse:
    return _checkout_response(load_checkout(checkout_id, user.user_id))


@checkout_router.post("/{checkout_id}/coupon", response_model=CouponQuoteResponse)
async def apply_checkout_coupon(
    checkout_id: str, body: ApplyCouponRequest, user: AuthenticatedUser = Depends(current_user)
) -> CouponQuoteResponse:
    command = ApplyCheckoutCoupon(user_id=user.user_id, checkout_id=checkout_id, code=body.code)
    quote = current_domain.process(command, asynchronous=False)
    return CouponQuoteResponse(code=quote.code, discount_percent=quote.discount_percent, new_total=quote.new_total)


@checkout_router.put("/{checkout_id}/quantity", response_model=CheckoutResponse)
async def set_buy_now_quantity(
    checkout_id: str, body: SetQuantityRequest, user: AuthenticatedUser = Depends(current_user)
) -> CheckoutResponse:
    command = SetBuyNowQuantity(user_id=user.user_id, checkout_id=checkout_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _checkout_response(load_checkout(checkout_id, user.user_id))


@checkout_router.post("/{checkout_id}/complete", status_code=201, response_model=OrderIdResponse)
async def complete_checkout(
    checkout_id: str, body: CompleteCheckoutRequest, user: AuthenticatedUser = Depends(current_user)
) -> OrderIdResponse:
    command = CompleteCheckout(
        user_id=user.user_id,
        checkout_id=checkout_id,
        address_id=body.address_id,
        customer_name=body.customer_name,
        phone=body.phone,
        address=body.address,
        payment_method=body.payment_method,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.get("", response_model=list[AddressSchema])
async def get_addresses(user: AuthenticatedUser = Depends(current_user)) -> list[AddressSchema]:
    return [
        AddressSchema(
            address_id=str(entry["id"]),
            name=entry["name"],
            phone=entry["phone"],
            address=entry["address"],
            pincode=entry["pincode"],
            city=entry["city"],
            state=entry["state"],
        )
        for entry in list_addresses(user.user_id)
    ]


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def save_address(body: AddressRequest, user: AuthenticatedUser = Depends(current_user)) -> AddressIdResponse:
    result = current_domain.process(SaveAddress(user_id=user.user_id, **body.model_dump()), asynchronous=False)
    return AddressIdResponse(address_id=result)


@address_router.put("/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: AddressRequest, user: AuthenticatedUser = Depends(current_user)
) -> StatusResponse:
    command = UpdateAddress(user_id=user.user_id, address_id=address_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@address_router.delete("/{address_id}", response_model=StatusResponse)
async def delete_address(address_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(DeleteAddress(user_id=user.user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
async def list_orders(user: AuthenticatedUser = Depends(current_user)) -> list[dict]:
    return orders_for_user(user.user_id)


@order_router.get("/{order_id}")
async def get_order(order_id: str, user: AuthenticatedUser = Depends(current_user)) -> dict:
    return order_detail(order_id, user_id=user.user_id)


@order_router.post("/{order_id}/cancel", response_model=StatusResponse)
async def request_cancellation(
    order_id: str, body: ReasonRequest, user: AuthenticatedUser = Depends(current_user)
) -> StatusResponse:
    command = RequestCancellation(user_id=user.user_id, order_id=order_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/return", response_model=StatusResponse)
async def request_return(
    order_id: str, body: ReasonRequest, user: AuthenticatedUser = Depends(current_user)
) -> StatusResponse:
    command = RequestReturn(user_id=user.user_id, order_id=order_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Notification Router
# ---------------------------------------------------------------------------
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.get("", response_model=InboxResponse)
async def get_inbox(user: AuthenticatedUser = Depends(current_user)) -> InboxResponse:
    return InboxResponse(notifications=list_notifications(user.user_id), unread=unread_count(user.user_id))


@notification_router.post("/{notification_id}/read", response_model=StatusResponse)
async def mark_read(notification_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    command = MarkNotificationRead(user_id=user.user_id, notification_id=notification_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@notification_router.post("/read-all", response_model=StatusResponse)
async def mark_all_read(user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(MarkAllNotificationsRead(user_id=user.user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Admin: Coupons
# ---------------------------------------------------------------------------
admin_coupon_router = APIRouter(prefix="/admin/coupons", tags=["admin"], dependencies=[Depends(verified_admin)])


@admin_coupon_router.get("", response_model=list[CouponSchema])
async def list_coupons() -> list[CouponSchema]:
    coupons = current_domain.repository_for(Coupon).all_coupons()
    return [CouponSchema(coupon_id=str(c.id), code=c.code, discount=c.discount, active=c.active) for c in coupons]


@admin_coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest) -> CouponIdResponse:
    result = current_domain.process(CreateCoupon(code=body.code, discount=body.discount), asynchronous=False)
    return CouponIdResponse(coupon_id=result)


@admin_coupon_router.put("/{coupon_id}/active", response_model=StatusResponse)
async def set_coupon_active(coupon_id: str, body: SetCouponActiveRequest) -> StatusResponse:
    current_domain.process(SetCouponActive(coupon_id=coupon_id, active=body.active), asynchronous=False)
    return StatusResponse()


@admin_coupon_router.delete("/{coupon_id}", response_model=StatusResponse)
async def delete_coupon(coupon_id: str) -> StatusResponse:
    current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Admin: Orders
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(verified_admin)])

_STATUS_COMMANDS = {
    OrderStatus.SHIPPED.value: ShipOrder,
    OrderStatus.DELIVERED.value: DeliverOrder,
    OrderStatus.CANCELLED.value: ApproveCancellation,
    OrderStatus.CANCEL_REJECTED.value: RejectCancellation,
    OrderStatus.RETURN_APPROVED.value: ApproveReturn,
    OrderStatus.RETURN_REJECTED.value: RejectReturn,
}


@admin_order_router.get("")
async def list_all_orders(status: str | None = None) -> list[dict]:
    return board_rows(status=status)


@admin_order_router.get("/{order_id}")
async def get_any_order(order_id: str) -> dict:
    return order_detail(order_id)


@admin_order_router.put("/{order_id}/status", response_model=StatusResponse)
async def set_order_status(order_id: str, body: SetOrderStatusRequest) -> StatusResponse:
    command_cls = _STATUS_COMMANDS.get(body.status)
    if command_cls is None:
        raise ValidationError({"status": [f"Admins cannot set status {body.status!r}"]})
    current_domain.process(command_cls(order_id=order_id), asynchronous=False)
    return StatusResponse()
