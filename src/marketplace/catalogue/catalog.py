"""ProductCatalog port backed by the Product repository."""

from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.shared.ports import ProductCatalog, ProductSnapshot


def _snapshot(product: Product) -> ProductSnapshot:
    return ProductSnapshot(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        stock_quantity=product.stock_quantity,
        store_id=str(product.store_id),
    )


class RepositoryProductCatalog(ProductCatalog):
    def get_product(self, product_id: str) -> ProductSnapshot:
        return _snapshot(current_domain.repository_for(Product).get(product_id))

    def reserve_stock(self, product_id: str, quantity: int) -> ProductSnapshot:
        return _snapshot(current_domain.repository_for(Product).reserve_stock(product_id, quantity))
