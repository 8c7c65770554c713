"""Order aggregate — a shopper's purchase with its line items.

State machine:
    pending → processing → shipped → delivered
    any non-terminal status → cancelled

``delivered`` and ``cancelled`` are terminal. Within the non-terminal
statuses an explicit update may move the order in any direction.
"""

import json
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.exceptions import InvalidState
from marketplace.ordering.events import OrderPlaced, OrderStatusChanged
from marketplace.utils.query import fetch_all


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value})


@marketplace.entity(part_of="Order")
class OrderItem:
    """A line of an order. Name, price and store are copied from the product
    when the order is placed and never change afterwards."""

    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.price

    def to_dict(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "store_id": str(self.store_id),
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price": self.price,
        }


@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    total_amount = Float(required=True, min_value=0.0)
    status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @classmethod
    def place(cls, user_id, lines):
        """Create a pending order.

        Args:
            user_id: The shopper placing the order.
            lines: List of dicts with product_id, store_id, product_name,
                   quantity and price (the unit price at order time).
        """
        now = datetime.now()
        total = round(sum(line["quantity"] * line["price"] for line in lines), 2)

        order = cls(
            user_id=user_id,
            total_amount=total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(OrderItem(**line))

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                total_amount=total,
                items=json.dumps([item.to_dict() for item in order.items]),
                placed_at=now,
            )
        )
        return order

    def change_status(self, status):
        valid = {s.value for s in OrderStatus}
        if status not in valid:
            raise ValidationError({"status": [f"Unknown order status '{status}'"]})
        if self.status in TERMINAL_STATUSES:
            raise InvalidState(f"Cannot change status of a {self.status} order")
        if status == self.status:
            return

        previous = self.status
        now = datetime.now()
        self.status = status
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                user_id=self.user_id,
                previous_status=previous,
                status=status,
                changed_at=now,
            )
        )

    def ensure_deletable(self):
        if self.status != OrderStatus.PENDING.value:
            raise InvalidState("Can only delete pending orders")

    def contains_store(self, store_id) -> bool:
        return any(str(item.store_id) == str(store_id) for item in self.items)

    def contains_product(self, product_id) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)


@marketplace.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id: str) -> list[Order]:
        return fetch_all(self._dao.query.filter(user_id=str(user_id)).order_by("-created_at"))

    def list_all(self) -> list[Order]:
        return fetch_all(self._dao.query.order_by("-created_at"))
