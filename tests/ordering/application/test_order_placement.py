"""Application tests for order placement and stock reservation."""

from dataclasses import replace

import pytest
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.catalogue.catalog import RepositoryProductCatalog
from marketplace.catalogue.management import UpdateProduct
from marketplace.catalogue.product import Product
from marketplace.exceptions import ForbiddenRole, InsufficientStock
from marketplace.ordering.order import Order, OrderItem
from marketplace.shared.ports import ProductCatalog, ProductSnapshot, set_product_catalog


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock_quantity


def _order_count():
    return len(current_domain.repository_for(Order).list_all())


class TestPlaceOrder:
    def test_order_is_pending_with_snapshot_total(self, place_order, product_id):
        order_id = place_order([{"product_id": product_id, "quantity": 3}])

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "pending"
        assert order.total_amount == 2999.97
        assert len(order.items) == 1
        assert order.items[0].price == 999.99
        assert order.items[0].product_name == "Laptop"

    def test_stock_is_reserved_at_placement(self, place_order, product_id):
        place_order([{"product_id": product_id, "quantity": 3}])
        assert _stock(product_id) == 7

    def test_multiple_products(self, place_order, make_product):
        laptop = make_product(name="Laptop", price=1000.0, stock_quantity=5)
        mouse = make_product(name="Mouse", price=25.5, stock_quantity=5)

        order_id = place_order([{"product_id": laptop, "quantity": 1}, {"product_id": mouse, "quantity": 2}])

        assert current_domain.repository_for(Order).get(order_id).total_amount == 1051.0
        assert _stock(laptop) == 4
        assert _stock(mouse) == 3

    def test_item_price_survives_later_price_edits(self, place_order, seller, product_id):
        order_id = place_order([{"product_id": product_id, "quantity": 1}])
        current_domain.process(
            UpdateProduct(actor_id=seller.user_id, actor_role=seller.role, product_id=product_id, price=1.0),
            asynchronous=False,
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].price == 999.99
        assert order.total_amount == 999.99

    def test_exact_stock_can_be_ordered(self, place_order, product_id):
        place_order([{"product_id": product_id, "quantity": 10}])
        assert _stock(product_id) == 0


class TestInsufficientStock:
    def test_nothing_persists(self, place_order, product_id):
        with pytest.raises(InsufficientStock) as exc:
            place_order([{"product_id": product_id, "quantity": 11}])

        assert exc.value.message == "Insufficient stock for product Laptop"
        assert _stock(product_id) == 10
        assert _order_count() == 0
        assert current_domain.repository_for(OrderItem)._dao.query.all().total == 0

    def test_second_line_short_leaves_first_untouched(self, place_order, make_product):
        plenty = make_product(name="Plenty", stock_quantity=50)
        scarce = make_product(name="Scarce", stock_quantity=1)

        with pytest.raises(InsufficientStock):
            place_order([{"product_id": plenty, "quantity": 5}, {"product_id": scarce, "quantity": 2}])

        assert _stock(plenty) == 50
        assert _stock(scarce) == 1
        assert _order_count() == 0

    def test_repeated_lines_are_checked_together(self, place_order, product_id):
        with pytest.raises(InsufficientStock):
            place_order([{"product_id": product_id, "quantity": 6}, {"product_id": product_id, "quantity": 5}])
        assert _stock(product_id) == 10

    def test_sequential_orders_cannot_oversell(self, place_order, product_id):
        place_order([{"product_id": product_id, "quantity": 6}])
        with pytest.raises(InsufficientStock):
            place_order([{"product_id": product_id, "quantity": 6}])
        assert _stock(product_id) == 4


class TestPlacementValidation:
    def test_empty_order_rejected(self, place_order):
        with pytest.raises(ValidationError):
            place_order([])

    def test_zero_quantity_rejected(self, place_order, product_id):
        with pytest.raises(ValidationError):
            place_order([{"product_id": product_id, "quantity": 0}])

    def test_boolean_quantity_rejected(self, place_order, product_id):
        with pytest.raises(ValidationError):
            place_order([{"product_id": product_id, "quantity": True}])
        assert _stock(product_id) == 10

    def test_unknown_product(self, place_order, product_id):
        with pytest.raises(ObjectNotFoundError):
            place_order([{"product_id": "missing", "quantity": 1}])

    def test_only_shoppers_order(self, place_order, seller, product_id):
        with pytest.raises(ForbiddenRole):
            place_order([{"product_id": product_id, "quantity": 1}], actor=seller)


class StubCatalog(ProductCatalog):
    def __init__(self):
        self.reserved = []

    def get_product(self, product_id):
        return ProductSnapshot(product_id=product_id, name="Stub", price=2.5, stock_quantity=100, store_id="store-x")

    def reserve_stock(self, product_id, quantity):
        self.reserved.append((product_id, quantity))
        return self.get_product(product_id)


class TestCatalogPort:
    def test_placement_goes_through_the_catalog_port(self, place_order):
        catalog = StubCatalog()
        set_product_catalog(catalog)

        order_id = place_order([{"product_id": "p-1", "quantity": 4}])

        assert catalog.reserved == [("p-1", 4)]
        order = current_domain.repository_for(Order).get(order_id)
        assert order.total_amount == 10.0
        assert order.items[0].store_id == "store-x"


class OptimisticCatalog(RepositoryProductCatalog):
    """Reports plenty of stock for ``product_id`` so only the reservation can refuse it."""

    def __init__(self, product_id):
        self.product_id = product_id

    def get_product(self, product_id):
        snapshot = super().get_product(product_id)
        if product_id == self.product_id:
            return replace(snapshot, stock_quantity=100)
        return snapshot


class TestReservationConflicts:
    def test_failed_reservation_rolls_back_earlier_lines(self, place_order, make_product):
        plenty = make_product(name="Plenty", stock_quantity=50)
        scarce = make_product(name="Scarce", stock_quantity=1)
        set_product_catalog(OptimisticCatalog(scarce))

        with pytest.raises(InsufficientStock):
            place_order([{"product_id": plenty, "quantity": 2}, {"product_id": scarce, "quantity": 3}])

        assert _stock(plenty) == 50
        assert _stock(scarce) == 1
        assert _order_count() == 0

    def test_reservation_from_stale_copy_is_rejected(self, product_id):
        repo = current_domain.repository_for(Product)
        first = repo.get(product_id)
        second = repo.get(product_id)

        first.reserve_stock(6)
        repo.add(first)

        second.reserve_stock(6)
        with pytest.raises(ExpectedVersionError):
            repo.add(second)

        assert _stock(product_id) == 4
