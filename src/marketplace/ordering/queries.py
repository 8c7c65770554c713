"""Order reads, filtered by what the caller is allowed to see."""

from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, Role, ensure_can_access_order, require
from marketplace.ordering.order import Order
from marketplace.store.store import Store


def seller_store_id(actor: Actor) -> str | None:
    if actor.role != Role.SELLER.value:
        return None
    store = current_domain.repository_for(Store).find_by_owner(actor.user_id)
    return str(store.id) if store is not None else None


def my_orders(actor: Actor) -> list[Order]:
    return current_domain.repository_for(Order).for_user(actor.user_id)


def all_orders(actor: Actor) -> list[Order]:
    require(actor, Capability.VIEW_ALL_ORDERS)
    return current_domain.repository_for(Order).list_all()


def store_orders(actor: Actor) -> list[Order]:
    """Orders containing at least one item from the seller's store."""
    require(actor, Capability.VIEW_STORE_ORDERS)
    store_id = seller_store_id(actor)
    if store_id is None:
        return []
    return [order for order in current_domain.repository_for(Order).list_all() if order.contains_store(store_id)]


def order_for(actor: Actor, order_id: str) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    ensure_can_access_order(actor, order, seller_store_id(actor))
    return order
