"""Read-only accessors shared between contexts.

Ordering needs product facts and stock reservation; reviews need purchase
history. Both reach them through these ports instead of importing each
other's aggregates. The repository-backed defaults are created lazily and
can be replaced with ``set_*`` (useful for tests).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """Product facts captured at a point in time."""

    product_id: str
    name: str
    price: float
    stock_quantity: int
    store_id: str


class ProductCatalog(ABC):
    @abstractmethod
    def get_product(self, product_id: str) -> ProductSnapshot:
        """Return a snapshot; raises ObjectNotFoundError for unknown ids."""
        ...

    @abstractmethod
    def reserve_stock(self, product_id: str, quantity: int) -> ProductSnapshot:
        """Decrement stock if enough is on hand, else raise InsufficientStock."""
        ...


class PurchaseHistory(ABC):
    @abstractmethod
    def has_purchased(self, user_id: str, product_id: str) -> bool:
        """True if any order of ``user_id`` contains ``product_id``."""
        ...


_product_catalog: ProductCatalog | None = None
_purchase_history: PurchaseHistory | None = None


def get_product_catalog() -> ProductCatalog:
    global _product_catalog
    if _product_catalog is None:
        from marketplace.catalogue.catalog import RepositoryProductCatalog

        _product_catalog = RepositoryProductCatalog()
    return _product_catalog


def set_product_catalog(catalog: ProductCatalog) -> None:
    global _product_catalog
    _product_catalog = catalog


def get_purchase_history() -> PurchaseHistory:
    global _purchase_history
    if _purchase_history is None:
        from marketplace.ordering.purchases import OrderPurchaseHistory

        _purchase_history = OrderPurchaseHistory()
    return _purchase_history


def set_purchase_history(history: PurchaseHistory) -> None:
    global _purchase_history
    _purchase_history = history


def reset_ports() -> None:
    global _product_catalog, _purchase_history
    _product_catalog = None
    _purchase_history = None
