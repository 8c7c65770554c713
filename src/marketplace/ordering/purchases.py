"""PurchaseHistory port backed by the Order repository.

Any past order counts, whatever its status.
"""

from protean.utils.globals import current_domain

from marketplace.ordering.order import Order
from marketplace.shared.ports import PurchaseHistory


class OrderPurchaseHistory(PurchaseHistory):
    def has_purchased(self, user_id: str, product_id: str) -> bool:
        orders = current_domain.repository_for(Order).for_user(user_id)
        return any(order.contains_product(product_id) for order in orders)
