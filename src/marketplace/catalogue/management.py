"""Product management — commands and handlers."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, ensure_store_manager, require
from marketplace.catalogue.category import Category
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.exceptions import StoreNotApproved, StoreRequired
from marketplace.store.store import Store

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class CreateProduct:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    name: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)


@marketplace.command(part_of="Product")
class UpdateProduct:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    price: Float(min_value=0.0)
    category_id: Identifier()


@marketplace.command(part_of="Product")
class SetProductStock:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    product_id: Identifier(required=True)
    stock_quantity: Integer(required=True, min_value=0)


@marketplace.command(part_of="Product")
class ToggleFeatured:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    product_id: Identifier(required=True)


@marketplace.command(part_of="Product")
class DeleteProduct:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    product_id: Identifier(required=True)


def _managed_product(command) -> Product:
    """Load the product and check the actor may manage its store."""
    product = current_domain.repository_for(Product).get(command.product_id)
    store = current_domain.repository_for(Store).get(product.store_id)
    ensure_store_manager(Actor.from_command(command), store)
    return product


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        actor = Actor.from_command(command)
        require(actor, Capability.SELL_PRODUCTS)

        store = current_domain.repository_for(Store).find_by_owner(actor.user_id)
        if store is None:
            raise StoreRequired()
        if not store.is_approved:
            raise StoreNotApproved()

        # Raises ObjectNotFoundError for an unknown category
        current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            store_id=store.id,
            category_id=command.category_id,
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), store_id=str(store.id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = _managed_product(command)
        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
        )
        current_domain.repository_for(Product).add(product)

    @handle(SetProductStock)
    def set_product_stock(self, command):
        product = _managed_product(command)
        product.set_stock(command.stock_quantity)
        current_domain.repository_for(Product).add(product)

    @handle(ToggleFeatured)
    def toggle_featured(self, command):
        require(Actor.from_command(command), Capability.FEATURE_PRODUCTS)

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_featured()
        repo.add(product)
        return product.is_featured

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = _managed_product(command)
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))
