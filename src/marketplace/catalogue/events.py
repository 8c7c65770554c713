"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    __version__ = 1

    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    category_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)


@marketplace.event(part_of="Product")
class StockAdjusted:
    """A seller or admin set the on-hand quantity directly."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@marketplace.event(part_of="Product")
class StockReserved:
    """Stock was taken for an order at placement time."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@marketplace.event(part_of="Product")
class ProductFeatureToggled:
    __version__ = 1

    product_id = Identifier(required=True)
    is_featured = Boolean(required=True)
