"""Welcome and health endpoints."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

root_router = APIRouter(tags=["root"])

API_VERSION = "1.0.0"


@root_router.get("/")
async def welcome() -> dict:
    return {
        "message": "Welcome to Marketplace API",
        "documentation": "/docs",
        "version": API_VERSION,
        "endpoints": {
            name: f"/api/{name}"
            for name in ("auth", "users", "stores", "products", "categories", "orders", "reviews", "payments")
        },
    }


@root_router.get("/health")
async def health() -> dict:
    return {"status": "ok", "domain": current_domain.name, "version": API_VERSION}
