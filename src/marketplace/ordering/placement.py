"""Order placement — command and handler.

Placement runs in two passes inside one unit of work. The first pass reads
every product and checks stock for the total quantity requested, without
writing anything. The second pass reserves stock with a conditional
decrement per product. The order is then added in the same unit of work, so
a failure anywhere leaves neither an order nor a stock change behind.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, require
from marketplace.domain import marketplace
from marketplace.exceptions import InsufficientStock
from marketplace.ordering.order import Order
from marketplace.shared.ports import get_product_catalog

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


def _parse_lines(raw) -> list[dict]:
    lines = json.loads(raw) if isinstance(raw, str) else raw
    if not lines:
        raise ValidationError({"items": ["Order must contain at least one item"]})

    parsed = []
    for line in lines:
        quantity = line.get("quantity")
        if not line.get("product_id") or isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": ["Each item needs a product_id and a quantity of at least 1"]})
        parsed.append({"product_id": str(line["product_id"]), "quantity": quantity})
    return parsed


def _requested_quantities(lines) -> dict[str, int]:
    requested: dict[str, int] = {}
    for line in lines:
        requested[line["product_id"]] = requested.get(line["product_id"], 0) + line["quantity"]
    return requested


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        actor = Actor.from_command(command)
        require(actor, Capability.PLACE_ORDER)

        lines = _parse_lines(command.items)
        requested = _requested_quantities(lines)
        catalog = get_product_catalog()

        snapshots = {}
        for product_id, quantity in requested.items():
            snapshot = catalog.get_product(product_id)
            if quantity > snapshot.stock_quantity:
                raise InsufficientStock(snapshot.name)
            snapshots[product_id] = snapshot

        for product_id, quantity in requested.items():
            catalog.reserve_stock(product_id, quantity)

        order = Order.place(
            user_id=actor.user_id,
            lines=[
                {
                    "product_id": line["product_id"],
                    "store_id": snapshots[line["product_id"]].store_id,
                    "product_name": snapshots[line["product_id"]].name,
                    "quantity": line["quantity"],
                    "price": snapshots[line["product_id"]].price,
                }
                for line in lines
            ],
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=actor.user_id,
            total_amount=order.total_amount,
            lines=len(lines),
        )
        return str(order.id)
