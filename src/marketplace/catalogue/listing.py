"""Public catalogue reads.

Only products of approved stores are visible through these functions.
"""

from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.store.store import Store

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def list_products(page=1, limit=DEFAULT_PAGE_SIZE, search=None, category_id=None) -> dict:
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_PAGE_SIZE)

    store_ids = current_domain.repository_for(Store).approved_ids()
    products, total = current_domain.repository_for(Product).search(
        store_ids,
        category_id=category_id,
        text=search.strip() if search else None,
        page=page,
        limit=limit,
    )
    return {"products": products, "total": total, "page": page, "limit": limit}


def featured_products() -> list[Product]:
    store_ids = current_domain.repository_for(Store).approved_ids()
    return current_domain.repository_for(Product).featured(store_ids)
