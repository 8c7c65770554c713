"""Exception-to-response mapping.

Protean's handlers cover its own exceptions; the marketplace handlers are
registered afterwards so that marketplace errors answer with their own
status code and a ``{"detail": ...}`` body, the same shape FastAPI uses for
``HTTPException``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from marketplace.exceptions import BadRequest, MarketplaceError


async def _marketplace_error(request: Request, exc: MarketplaceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _bad_request(request: Request, exc: BadRequest) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message, "errors": exc.messages})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc) or "Not found"})


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)
    app.add_exception_handler(MarketplaceError, _marketplace_error)
    app.add_exception_handler(BadRequest, _bad_request)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
