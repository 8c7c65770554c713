"""Marketplace HTTP API package."""

from fastapi import FastAPI

from marketplace.api.accounts import auth_router, user_router
from marketplace.api.catalogue import category_router, product_router
from marketplace.api.orders import order_router
from marketplace.api.payments import payment_router
from marketplace.api.reviews import review_router
from marketplace.api.root import root_router
from marketplace.api.stores import store_router

ROUTERS = [
    root_router,
    auth_router,
    user_router,
    store_router,
    category_router,
    product_router,
    order_router,
    review_router,
    payment_router,
]


def include_routers(app: FastAPI, prefix: str = "/api") -> None:
    for router in ROUTERS:
        app.include_router(router, prefix=prefix)


__all__ = [
    "ROUTERS",
    "auth_router",
    "category_router",
    "include_routers",
    "order_router",
    "payment_router",
    "product_router",
    "review_router",
    "root_router",
    "store_router",
    "user_router",
]
