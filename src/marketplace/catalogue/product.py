"""Product aggregate root and its repository."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.query import Q

from marketplace.catalogue.events import ProductCreated, ProductFeatureToggled, StockAdjusted, StockReserved
from marketplace.domain import marketplace
from marketplace.exceptions import InsufficientStock
from marketplace.utils.query import fetch_all


@marketplace.aggregate
class Product:
    """A sellable item listed by a store under a category.

    ``stock_quantity`` never drops below zero: stock leaves the product only
    through ``reserve_stock``, which refuses a quantity larger than what is
    on hand.
    """

    name: String(required=True, max_length=200)
    description: Text(default="")
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0, min_value=0)
    is_featured: Boolean(default=False)
    store_id: Identifier(required=True)
    category_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, store_id, category_id, name, price, stock_quantity=0, description=None):
        now = datetime.now()
        product = cls(
            store_id=store_id,
            category_id=category_id,
            name=name,
            description=description or "",
            price=price,
            stock_quantity=stock_quantity,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                store_id=store_id,
                category_id=category_id,
                name=name,
                price=price,
                stock_quantity=stock_quantity,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category_id=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category_id is not None:
            self.category_id = category_id
        self.updated_at = datetime.now()

    def set_stock(self, quantity):
        previous = self.stock_quantity
        self.stock_quantity = quantity
        self.updated_at = datetime.now()
        self.raise_(StockAdjusted(product_id=self.id, previous_quantity=previous, new_quantity=quantity))

    def reserve_stock(self, quantity):
        if quantity > self.stock_quantity:
            raise InsufficientStock(self.name)

        self.stock_quantity -= quantity
        self.updated_at = datetime.now()
        self.raise_(StockReserved(product_id=self.id, quantity=quantity, remaining=self.stock_quantity))

    def toggle_featured(self):
        self.is_featured = not self.is_featured
        self.updated_at = datetime.now()
        self.raise_(ProductFeatureToggled(product_id=self.id, is_featured=self.is_featured))


@marketplace.repository(part_of=Product)
class ProductRepository:
    def reserve_stock(self, product_id: str, quantity: int) -> Product:
        """Check and decrement stock as one operation.

        Runs inside the caller's unit of work; the aggregate version check on
        commit rejects a concurrent writer that reserved from the same
        snapshot.
        """
        product = self.get(product_id)
        product.reserve_stock(quantity)
        self.add(product)
        return product

    def for_store(self, store_id: str) -> list[Product]:
        return fetch_all(self._dao.query.filter(store_id=store_id).order_by("-created_at"))

    def in_category(self, category_id: str) -> list[Product]:
        return self._dao.query.filter(category_id=category_id).all().items

    def search(self, store_ids, category_id=None, text=None, page=1, limit=10):
        """Newest-first page of products from ``store_ids``; returns ``(items, total)``."""
        if not store_ids:
            return [], 0

        query = self._dao.query.filter(store_id__in=list(store_ids))
        if category_id:
            query = query.filter(category_id=category_id)
        if text:
            query = query.filter(Q(name__icontains=text) | Q(description__icontains=text))

        results = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return results.items, results.total

    def featured(self, store_ids) -> list[Product]:
        if not store_ids:
            return []
        return fetch_all(self._dao.query.filter(is_featured=True, store_id__in=list(store_ids)).order_by("-created_at"))
