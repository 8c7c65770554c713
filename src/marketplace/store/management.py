"""Store management — commands and handlers."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, ensure_store_manager, require
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict
from marketplace.store.store import Store

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Store")
class CreateStore:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    name: String(required=True, max_length=100)
    description: Text()


@marketplace.command(part_of="Store")
class UpdateStore:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    store_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()


@marketplace.command(part_of="Store")
class ApproveStore:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    store_id: Identifier(required=True)


@marketplace.command(part_of="Store")
class DeleteStore:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    store_id: Identifier(required=True)


@marketplace.command_handler(part_of=Store)
class ManageStoreHandler:
    @handle(CreateStore)
    def create_store(self, command):
        actor = Actor.from_command(command)
        require(actor, Capability.OPEN_STORE)

        repo = current_domain.repository_for(Store)
        if repo.find_by_owner(actor.user_id) is not None:
            raise Conflict("Seller can only have one store")

        store = Store.create(owner_id=actor.user_id, name=command.name, description=command.description)
        repo.add(store)
        logger.info("Store created", store_id=str(store.id), owner_id=actor.user_id)
        return str(store.id)

    @handle(UpdateStore)
    def update_store(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        ensure_store_manager(Actor.from_command(command), store)

        store.update_details(name=command.name, description=command.description)
        repo.add(store)

    @handle(ApproveStore)
    def approve_store(self, command):
        require(Actor.from_command(command), Capability.APPROVE_STORES)

        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        store.approve()
        repo.add(store)
        logger.info("Store approved", store_id=str(store.id))

    @handle(DeleteStore)
    def delete_store(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        ensure_store_manager(Actor.from_command(command), store)

        if current_domain.repository_for(Product).for_store(str(store.id)):
            raise Conflict("Store still has products; delete them first")

        repo._dao.delete(store)
        logger.info("Store deleted", store_id=str(store.id))
