"""Store aggregate — a seller's storefront."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.store.events import StoreApproved, StoreCreated, StoreUpdated
from marketplace.utils.query import fetch_all


@marketplace.aggregate
class Store:
    """One store per seller. Products of a store are listed publicly only once
    an admin has approved it."""

    name: String(required=True, max_length=100)
    description: Text()
    is_approved: Boolean(default=False)
    owner_id: Identifier(required=True, unique=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, owner_id, name, description=None):
        now = datetime.now()
        store = cls(
            owner_id=owner_id,
            name=name,
            description=description,
            is_approved=False,
            created_at=now,
            updated_at=now,
        )
        store.raise_(StoreCreated(store_id=store.id, owner_id=owner_id, name=name))
        return store

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now()
        self.raise_(StoreUpdated(store_id=self.id, name=self.name))

    def approve(self):
        if self.is_approved:
            return
        now = datetime.now()
        self.is_approved = True
        self.updated_at = now
        self.raise_(StoreApproved(store_id=self.id, owner_id=self.owner_id, approved_at=now))


@marketplace.repository(part_of=Store)
class StoreRepository:
    def find_by_owner(self, owner_id: str) -> Store | None:
        stores = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return stores[0] if stores else None

    def approved_ids(self) -> list[str]:
        return [str(store.id) for store in fetch_all(self._dao.query.filter(is_approved=True))]

    def list_all(self) -> list[Store]:
        return fetch_all(self._dao.query.order_by("-created_at"))
