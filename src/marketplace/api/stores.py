"""FastAPI endpoints for seller stores."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.api.catalogue import product_response
from marketplace.api.schemas import (
    CreateStoreRequest,
    MessageResponse,
    StoreIdResponse,
    StoreResponse,
    UpdateStoreRequest,
    UserSummary,
)
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.catalogue.product import Product
from marketplace.store.management import ApproveStore, CreateStore, DeleteStore, UpdateStore
from marketplace.store.store import Store

store_router = APIRouter(prefix="/stores", tags=["stores"])


def _owner_summary(owner_id) -> UserSummary | None:
    try:
        return UserSummary(**current_domain.repository_for(User).get(owner_id).summary())
    except ObjectNotFoundError:
        return None


def store_response(store: Store, with_products: bool = False) -> StoreResponse:
    products = []
    if with_products:
        products = [product_response(p) for p in current_domain.repository_for(Product).for_store(str(store.id))]
    return StoreResponse(
        id=str(store.id),
        name=store.name,
        description=store.description,
        is_approved=store.is_approved,
        owner_id=str(store.owner_id),
        owner=_owner_summary(store.owner_id),
        products=products,
        created_at=store.created_at,
    )


@store_router.post("", status_code=201, response_model=StoreIdResponse)
async def create_store(body: CreateStoreRequest, actor: Actor = Depends(current_actor)) -> StoreIdResponse:
    command = CreateStore(name=body.name, description=body.description, **actor_fields(actor))
    result = current_domain.process(command, asynchronous=False)
    return StoreIdResponse(store_id=result)


@store_router.get("", response_model=list[StoreResponse])
async def list_stores(actor: Actor = Depends(current_actor)) -> list[StoreResponse]:
    return [store_response(store) for store in current_domain.repository_for(Store).list_all()]


@store_router.get("/{store_id}", response_model=StoreResponse)
async def get_store(store_id: str, actor: Actor = Depends(current_actor)) -> StoreResponse:
    return store_response(current_domain.repository_for(Store).get(store_id), with_products=True)


@store_router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: str, body: UpdateStoreRequest, actor: Actor = Depends(current_actor)
) -> StoreResponse:
    command = UpdateStore(
        store_id=store_id,
        name=body.name,
        description=body.description,
        **actor_fields(actor),
    )
    current_domain.process(command, asynchronous=False)
    return store_response(current_domain.repository_for(Store).get(store_id))


@store_router.post("/{store_id}/approve", response_model=StoreResponse)
async def approve_store(store_id: str, actor: Actor = Depends(current_actor)) -> StoreResponse:
    current_domain.process(ApproveStore(store_id=store_id, **actor_fields(actor)), asynchronous=False)
    return store_response(current_domain.repository_for(Store).get(store_id))


@store_router.delete("/{store_id}", response_model=MessageResponse)
async def delete_store(store_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteStore(store_id=store_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="Store deleted successfully")
