"""Dress Gallery ordering service — FastAPI application.

Processes cart, order and inventory commands synchronously over HTTP. Every
request under one of the ordering prefixes runs inside the ordering domain
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from ordering/domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import ordering
from ordering.utils.logging import clear_context, configure_logging

configure_logging()
ordering.init()

_DOMAIN_PREFIXES = ("/cart", "/orders", "/inventory")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Dress Gallery API",
    description="E-commerce ordering core: carts, orders and inventory",
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
    """Push the ordering domain context for each domain request."""
    clear_context()
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with ordering.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    inventory_router,
    order_router,
    register_exception_handlers,
)

app.include_router(cart_router)
app.include_router(order_router)
app.include_router(inventory_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"success": True, "status": "ok", "domain": ordering.name})
