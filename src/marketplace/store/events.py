"""Domain events for the Store aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Store")
class StoreCreated:
    __version__ = 1

    store_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)


@marketplace.event(part_of="Store")
class StoreUpdated:
    __version__ = 1

    store_id = Identifier(required=True)
    name = String()


@marketplace.event(part_of="Store")
class StoreApproved:
    __version__ = 1

    store_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    approved_at = DateTime(required=True)

