"""Marketplace FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from marketplace.account.bootstrap import ensure_admin
from marketplace.api import include_routers
from marketplace.api.errors import register_exception_handlers
from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"        → memory providers, sync event processing
#   - "development" → SQLite database
#   - "production"  → PostgreSQL, Redis broker, async event processing
marketplace.init()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    with marketplace.domain_context():
        admin_id = ensure_admin()
    logger.info("Marketplace API started", admin_id=admin_id)
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketplace API",
    description="Multi-tenant marketplace: accounts, stores, catalogue, orders, payments and reviews",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context for each request."""
    clear_context()
    add_context(request_id=uuid4().hex, method=request.method, path=request.url.path)
    try:
        with marketplace.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


register_exception_handlers(app)
include_routers(app, prefix="/api")
