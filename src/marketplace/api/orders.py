"""FastAPI endpoints for orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    CreateOrderRequest,
    MessageResponse,
    OrderItemResponse,
    OrderResponse,
    UpdateOrderStatusRequest,
)
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.ordering import queries
from marketplace.ordering.order import Order
from marketplace.ordering.placement import PlaceOrder
from marketplace.ordering.status import DeleteOrder, UpdateOrderStatus

order_router = APIRouter(prefix="/orders", tags=["orders"])


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        total_amount=order.total_amount,
        status=order.status,
        items=[OrderItemResponse(id=str(item.id), **item.to_dict()) for item in order.items],
        created_at=order.created_at,
    )


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: CreateOrderRequest, actor: Actor = Depends(current_actor)) -> OrderResponse:
    command = PlaceOrder(
        items=json.dumps([item.model_dump() for item in body.items]),
        **actor_fields(actor),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(actor: Actor = Depends(current_actor)) -> list[OrderResponse]:
    return [order_response(order) for order in queries.my_orders(actor)]


@order_router.get("/all", response_model=list[OrderResponse])
async def all_orders(actor: Actor = Depends(current_actor)) -> list[OrderResponse]:
    return [order_response(order) for order in queries.all_orders(actor)]


@order_router.get("/store", response_model=list[OrderResponse])
async def store_orders(actor: Actor = Depends(current_actor)) -> list[OrderResponse]:
    return [order_response(order) for order in queries.store_orders(actor)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return order_response(queries.order_for(actor, order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, actor: Actor = Depends(current_actor)
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, **actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(order_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteOrder(order_id=order_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="Order deleted successfully")
