"""Error kinds raised by the storefront.

Validation failures extend Protean's ``ValidationError`` and missing records
extend ``ObjectNotFoundError``, so the FastAPI exception handlers that Protean
registers map them to 400 and 404 without extra wiring.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InvalidQuantity(ValidationError):
    """Quantity below 1."""

    def __init__(self, quantity):
        super().__init__({"quantity": [f"Quantity must be at least 1, got {quantity}"]})


class MissingBillingInfo(ValidationError):
    def __init__(self, fields):
        super().__init__({field: ["is required"] for field in fields})


class EmptyOrder(ValidationError):
    def __init__(self):
        super().__init__({"items": ["An order needs at least one item"]})


class CouponAlreadyApplied(ValidationError):
    def __init__(self, code):
        super().__init__({"coupon_code": [f"A coupon ({code}) is already applied to this checkout"]})


class InvalidTransitionError(ValidationError):
    """Order status change requested from a state that does not allow it."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


class NotFoundError(ObjectNotFoundError):
    """A record the caller asked for is missing or belongs to someone else.

    Carries a field-keyed ``messages`` dict like ``ValidationError`` does,
    which the API returns as the 404 body.
    """

    def __init__(self, messages):
        self.messages = messages
        super().__init__(messages)


class CouponNotFound(NotFoundError):
    def __init__(self, code):
        self.code = code
        super().__init__({"coupon_code": [f"No active coupon matches {code!r}"]})


class ProductNotFound(NotFoundError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__({"product_id": [f"Product {product_id} does not exist"]})


class RemoteOperationError(Exception):
    """The backing store or a remote collaborator failed to complete a read or write."""


class UnknownOrderStatus(Exception):
    """A persisted order carries a status outside the known vocabulary."""

    def __init__(self, order_id, status):
        self.order_id = order_id
        self.status = status
        super().__init__(f"Order {order_id} has unrecognised status {status!r}")


class OrderNotFound(NotFoundError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__({"order_id": [f"Order {order_id} does not exist"]})
