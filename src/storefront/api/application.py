"""FastAPI application factory.

Every request runs inside the storefront domain context, so route handlers
can reach repositories and `current_domain.process` directly.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import auth, cart, orders, products, users
from storefront.api.errors import register_exception_handlers
from storefront.utils.logging import add_context, clear_context


def create_app(domain) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="E-commerce backend: catalogue, accounts, carts and orders",
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
        """Push the Protean domain context for each API request, with request fields bound to the logs."""
        if not request.url.path.startswith("/api"):
            return await call_next(request)

        clear_context()
        add_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
        with domain.domain_context():
            return await call_next(request)

    for module in (auth, users, products, cart, orders):
        app.include_router(module.router)

    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
