import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("EMAIL_ADAPTER", "fake")

    import marketplace.api  # noqa: F401  # import routers before init(), as app.py does
    from marketplace.domain import marketplace

    marketplace.init()
    marketplace.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db, setup_db

    setup_db(marketplace)

    yield

    drop_db(marketplace)


@pytest.fixture(autouse=True)
def outbox():
    """Fresh in-memory email channel for every test."""
    from marketplace.notification.channel import reset_channels, set_email_channel
    from marketplace.notification.channel.fake_email import FakeEmailAdapter

    adapter = FakeEmailAdapter()
    set_email_channel(adapter)

    yield adapter

    reset_channels()


@pytest.fixture(autouse=True)
def gateway():
    """Deterministic payment gateway; succeeds unless reconfigured."""
    from marketplace.payment.gateway import reset_gateway, set_gateway
    from marketplace.payment.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)

    yield fake

    reset_gateway()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from marketplace.shared.ports import reset_ports
    from marketplace.utils.logging import clear_context

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain brokers and event stores
    for _, broker in current_domain.brokers.items():
        broker._data_reset()
    current_domain.event_store.store._data_reset()

    reset_ports()
    clear_context()


# ---------------------------------------------------------------------------
# Marketplace fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    """Factory persisting a verified user; returns an ``Actor`` for it."""
    from protean import current_domain

    from marketplace.account.user import User
    from marketplace.auth.actor import Actor
    from marketplace.auth.passwords import hash_password

    def _make(email="shopper@example.com", role="shopper", name="Test User", password="secret123"):
        if role == "admin":
            user = User.create_admin(email=email, password_hash=hash_password(password), name=name)
        else:
            user = User.register(email=email, password_hash=hash_password(password), name=name, role=role)
            user.verify_email()
        current_domain.repository_for(User).add(user)
        return Actor(user_id=str(user.id), role=user.role, email=user.email)

    return _make


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@marketplace.com", role="admin", name="Admin")


@pytest.fixture()
def shopper(make_user):
    return make_user(email="shopper@example.com", role="shopper", name="Sam Shopper")


@pytest.fixture()
def seller(make_user):
    return make_user(email="seller@example.com", role="seller", name="Sally Seller")


@pytest.fixture()
def store_id(seller, admin):
    """An approved store owned by ``seller``."""
    from protean import current_domain

    from marketplace.store.management import ApproveStore, CreateStore

    store_id = current_domain.process(
        CreateStore(actor_id=seller.user_id, actor_role=seller.role, name="Gadget Hub", description="Gadgets"),
        asynchronous=False,
    )
    current_domain.process(
        ApproveStore(actor_id=admin.user_id, actor_role=admin.role, store_id=store_id),
        asynchronous=False,
    )
    return store_id


@pytest.fixture()
def category_id(admin):
    from protean import current_domain

    from marketplace.catalogue.category import CreateCategory

    return current_domain.process(
        CreateCategory(actor_id=admin.user_id, actor_role=admin.role, name="Electronics"),
        asynchronous=False,
    )


@pytest.fixture()
def make_product(seller, store_id, category_id):
    """Factory creating products in the seller's approved store."""
    from protean import current_domain

    from marketplace.catalogue.management import CreateProduct

    def _make(name="Laptop", price=999.99, stock_quantity=10, description="A fast laptop", category=None):
        return current_domain.process(
            CreateProduct(
                actor_id=seller.user_id,
                actor_role=seller.role,
                name=name,
                description=description,
                price=price,
                stock_quantity=stock_quantity,
                category_id=category or category_id,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def product_id(make_product):
    return make_product()


@pytest.fixture()
def place_order(shopper):
    """Place an order for ``shopper`` (or ``actor``); returns the order id."""
    import json

    from protean import current_domain

    from marketplace.ordering.placement import PlaceOrder

    def _place(lines, actor=None):
        actor = actor or shopper
        return current_domain.process(
            PlaceOrder(actor_id=actor.user_id, actor_role=actor.role, items=json.dumps(lines)),
            asynchronous=False,
        )

    return _place


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from marketplace.api import include_routers
    from marketplace.api.errors import register_exception_handlers

    app = FastAPI()
    include_routers(app, prefix="/api")
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def headers_for():
    """Build an ``Authorization`` header for an ``Actor``."""
    from marketplace.auth.tokens import issue_token

    def _headers(actor):
        return {"Authorization": f"Bearer {issue_token(actor.user_id, actor.email, actor.role)}"}

    return _headers
