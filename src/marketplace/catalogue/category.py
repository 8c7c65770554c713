"""Category aggregate and its management commands.

Category names are unique. A category cannot be deleted while products
still reference it.
"""

from datetime import datetime

from protean import handle
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, require
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict
from marketplace.utils.query import fetch_all


@marketplace.aggregate
class Category:
    name: String(required=True, max_length=100, unique=True)
    description: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None):
        now = datetime.now()
        return cls(name=name, description=description, created_at=now, updated_at=now)

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now()


@marketplace.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name: str) -> Category | None:
        categories = self._dao.query.filter(name=name).all().items
        return categories[0] if categories else None

    def list_all(self) -> list[Category]:
        return fetch_all(self._dao.query.order_by("name"))


@marketplace.command(part_of="Category")
class CreateCategory:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    name: String(required=True, max_length=100)
    description: Text()


@marketplace.command(part_of="Category")
class UpdateCategory:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()


@marketplace.command(part_of="Category")
class DeleteCategory:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    category_id: Identifier(required=True)


def _ensure_name_available(repo, name, category_id=None):
    existing = repo.find_by_name(name)
    if existing is not None and str(existing.id) != str(category_id):
        raise Conflict("Category with this name already exists")


@marketplace.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        require(Actor.from_command(command), Capability.MANAGE_CATEGORIES)

        repo = current_domain.repository_for(Category)
        _ensure_name_available(repo, command.name)

        category = Category.create(name=command.name, description=command.description)
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        require(Actor.from_command(command), Capability.MANAGE_CATEGORIES)

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        if command.name:
            _ensure_name_available(repo, command.name, category.id)

        category.update_details(name=command.name, description=command.description)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from marketplace.catalogue.product import Product

        require(Actor.from_command(command), Capability.MANAGE_CATEGORIES)

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        if current_domain.repository_for(Product).in_category(str(category.id)):
            raise Conflict("Category still has products")

        repo._dao.delete(category)
