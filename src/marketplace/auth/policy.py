"""Authorization policy.

Two kinds of checks live here and nowhere else:

* role capabilities: a static table of what each role may do at all;
* ownership rules: whether a given actor may act on a given record.

Command handlers call into this module instead of comparing roles inline.
"""

from enum import Enum

from marketplace.auth.actor import Actor
from marketplace.exceptions import Forbidden, ForbiddenRole


class Role(Enum):
    SHOPPER = "shopper"
    SELLER = "seller"
    ADMIN = "admin"


class Capability(Enum):
    PLACE_ORDER = "place orders"
    WRITE_REVIEW = "review products"
    OPEN_STORE = "create a store"
    SELL_PRODUCTS = "create products"
    VIEW_STORE_ORDERS = "view store orders"
    MANAGE_USERS = "manage users"
    APPROVE_SELLERS = "approve sellers"
    APPROVE_STORES = "approve stores"
    MANAGE_CATEGORIES = "manage categories"
    FEATURE_PRODUCTS = "feature products"
    VIEW_ALL_ORDERS = "view all orders"
    REFUND_PAYMENTS = "refund payments"


_ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    Role.SHOPPER.value: frozenset({Capability.PLACE_ORDER, Capability.WRITE_REVIEW}),
    Role.SELLER.value: frozenset(
        {
            Capability.OPEN_STORE,
            Capability.SELL_PRODUCTS,
            Capability.VIEW_STORE_ORDERS,
        }
    ),
    Role.ADMIN.value: frozenset(
        {
            Capability.MANAGE_USERS,
            Capability.APPROVE_SELLERS,
            Capability.APPROVE_STORES,
            Capability.MANAGE_CATEGORIES,
            Capability.FEATURE_PRODUCTS,
            Capability.VIEW_ALL_ORDERS,
            Capability.REFUND_PAYMENTS,
        }
    ),
}

# Order statuses a shopper may set on their own order
_SHOPPER_STATUS_CHANGES = frozenset({"cancelled"})


def can(role: str, capability: Capability) -> bool:
    return capability in _ROLE_CAPABILITIES.get(role, frozenset())


def require(actor: Actor, capability: Capability) -> None:
    if not can(actor.role, capability):
        raise ForbiddenRole(actor.role, capability.value)


def is_admin(actor: Actor) -> bool:
    return actor.role == Role.ADMIN.value


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------
def ensure_store_manager(actor: Actor, store) -> None:
    """Stores, and the products in them, are managed by their owner or an admin."""
    if is_admin(actor) or str(store.owner_id) == actor.user_id:
        return
    raise Forbidden("You can only manage your own store")


def can_access_order(actor: Actor, order, seller_store_id: str | None = None) -> bool:
    if is_admin(actor):
        return True
    if actor.role == Role.SHOPPER.value:
        return str(order.user_id) == actor.user_id
    if actor.role == Role.SELLER.value and seller_store_id:
        return order.contains_store(seller_store_id)
    return False


def ensure_can_access_order(actor: Actor, order, seller_store_id: str | None = None) -> None:
    if not can_access_order(actor, order, seller_store_id):
        raise Forbidden("You do not have access to this order")


def ensure_can_set_order_status(actor: Actor, order, status: str, seller_store_id: str | None = None) -> None:
    ensure_can_access_order(actor, order, seller_store_id)
    if actor.role == Role.SHOPPER.value and status not in _SHOPPER_STATUS_CHANGES:
        raise Forbidden("Shoppers can only cancel their orders")


def ensure_can_delete_order(actor: Actor, order) -> None:
    if is_admin(actor) or str(order.user_id) == actor.user_id:
        return
    raise Forbidden("You can only delete your own orders")


def ensure_order_owner(actor: Actor, order) -> None:
    if str(order.user_id) != actor.user_id:
        raise Forbidden("You can only pay for your own orders")


def ensure_can_view_payment(actor: Actor, payment) -> None:
    if is_admin(actor) or str(payment.user_id) == actor.user_id:
        return
    raise Forbidden("You do not have access to this payment")


def ensure_review_author(actor: Actor, review) -> None:
    if str(review.user_id) != actor.user_id:
        raise Forbidden("You can only update your own reviews")


def ensure_review_author_or_admin(actor: Actor, review) -> None:
    if is_admin(actor) or str(review.user_id) == actor.user_id:
        return
    raise Forbidden("You can only delete your own reviews")
