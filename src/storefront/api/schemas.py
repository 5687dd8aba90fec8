"""Pydantic request/response schemas for the storefront API.

These are external contracts, separate from the internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ItemSchema(BaseModel):
    product_id: str
    name: str
    price: float
    discount_price: float | None = None
    image: str | None = None
    quantity: int | None = None


# ---------------------------------------------------------------------------
# Cart / wishlist
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class SetQuantityRequest(BaseModel):
    quantity: int


class AddToWishlistRequest(BaseModel):
    product_id: str


class CartResponse(BaseModel):
    items: list[ItemSchema]
    total: float


class WishlistResponse(BaseModel):
    items: list[ItemSchema]


class CartIdResponse(BaseModel):
    cart_id: str


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class BuyNowSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class StartCheckoutRequest(BaseModel):
    buy_now: BuyNowSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"buy_now": None},
                {"buy_now": {"product_id": "prod-001", "quantity": 2}},
            ]
        }
    }


class CheckoutResponse(BaseModel):
    checkout_id: str
    source: str
    items: list[ItemSchema]
    subtotal: float
    coupon_code: str | None = None
    discount_percent: float = 0.0
    total: float


class ApplyCouponRequest(BaseModel):
    code: str


class CouponQuoteResponse(BaseModel):
    code: str
    discount_percent: float
    new_total: float


class CompleteCheckoutRequest(BaseModel):
    customer_name: str = ""
    phone: str = ""
    address: str = ""
    address_id: str | None = None
    payment_method: str = "COD"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Asha Rao",
                    "phone": "9876543210",
                    "address": "12 MG Road, Bengaluru",
                    "payment_method": "COD",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class ReasonRequest(BaseModel):
    reason: str


class SetOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Coupons (admin)
# ---------------------------------------------------------------------------
class CreateCouponRequest(BaseModel):
    code: str
    discount: float


class SetCouponActiveRequest(BaseModel):
    active: bool


class CouponIdResponse(BaseModel):
    coupon_id: str


class CouponSchema(BaseModel):
    coupon_id: str
    code: str
    discount: float
    active: bool


# ---------------------------------------------------------------------------
# Address book
# ---------------------------------------------------------------------------
class AddressRequest(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""
    pincode: str = ""
    city: str = ""
    state: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "phone": "9876543210",
                    "address": "12 MG Road",
                    "pincode": "560001",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                }
            ]
        }
    }


class AddressSchema(AddressRequest):
    address_id: str


class AddressIdResponse(BaseModel):
    address_id: str


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------
class InboxResponse(BaseModel):
    notifications: list[dict]
    unread: int


class StatusResponse(BaseModel):
    status: str = "ok"
