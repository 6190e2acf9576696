from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from storefront.config import Settings, settings as default_settings
from storefront.database import build_engine, create_db_and_tables
from storefront.error_handlers import register_error_handlers
from storefront.routes import admin, cart, health, invoices, orders, payments
from storefront.utils.logging_config import configure_logging

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if app.state.settings.env == "local":
        create_db_and_tables(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine if engine is not None else build_engine(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(cart.router, prefix=f"{API_PREFIX}/cart", tags=["Cart"])
    app.include_router(orders.router, prefix=f"{API_PREFIX}/orders", tags=["Orders"])
    app.include_router(payments.router, prefix=f"{API_PREFIX}/payments", tags=["Payments"])
    app.include_router(invoices.router, prefix=f"{API_PREFIX}/invoices", tags=["Invoices"])
    app.include_router(admin.router, prefix=f"{API_PREFIX}/admin", tags=["Admin"])

    return app


app = create_app()
