"""Marketplace error types.

Two families:

* ``MarketplaceError`` subclasses carry an HTTP status code (401, 403, 404,
  409) and a human-readable message.
* ``BadRequest`` subclasses Protean's ``ValidationError`` so that business
  rule violations surface as 400 responses alongside field validation errors.
"""

from protean.exceptions import ValidationError


class MarketplaceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(MarketplaceError):
    status_code = 401


class Forbidden(MarketplaceError):
    status_code = 403


class ForbiddenRole(Forbidden):
    """The caller's role lacks the capability required by the operation."""

    def __init__(self, role: str, action: str):
        super().__init__(f"Role '{role}' is not allowed to {action}")
        self.role = role
        self.action = action


class NotFound(MarketplaceError):
    status_code = 404


class Conflict(MarketplaceError):
    status_code = 409


class BadRequest(ValidationError):
    field = "request"
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__({self.field: [self.message]})


class InsufficientStock(BadRequest):
    field = "stock"

    def __init__(self, product_name: str):
        super().__init__(f"Insufficient stock for product {product_name}")
        self.product_name = product_name


class InvalidState(BadRequest):
    field = "status"
    default_message = "Operation not allowed in the current state"


class NotPending(InvalidState):
    default_message = "Order is no longer pending"


class AlreadyPaid(BadRequest):
    field = "order_id"
    default_message = "Order has already been paid for"


class DuplicateReview(BadRequest):
    field = "product_id"
    default_message = "You have already reviewed this product"


class NotPurchased(BadRequest):
    field = "product_id"
    default_message = "You can only review products you have purchased"


class StoreRequired(BadRequest):
    field = "store"
    default_message = "You need to create a store first"


class StoreNotApproved(BadRequest):
    field = "store"
    default_message = "Your store needs to be approved first"
