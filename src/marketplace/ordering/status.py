"""Order status changes and deletion — commands and handlers."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import ensure_can_delete_order, ensure_can_set_order_status
from marketplace.domain import marketplace
from marketplace.ordering.order import Order, OrderItem
from marketplace.ordering.queries import seller_store_id

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@marketplace.command(part_of="Order")
class DeleteOrder:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    order_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        ensure_can_set_order_status(actor, order, command.status, seller_store_id(actor))
        order.change_status(command.status)
        repo.add(order)

        logger.info("Order status updated", order_id=str(order.id), status=order.status)
        return order.status

    @handle(DeleteOrder)
    def delete_order(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        ensure_can_delete_order(actor, order)
        order.ensure_deletable()

        item_dao = current_domain.repository_for(OrderItem)._dao
        for item in list(order.items):
            item_dao.delete(item)
        repo._dao.delete(order)

        logger.info("Order deleted", order_id=str(order.id))
