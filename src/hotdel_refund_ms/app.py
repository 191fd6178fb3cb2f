"""FastAPI Application for the Refund Microservice."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotdel_refund_ms.features.payments.presentation import router as payments_router
from hotdel_refund_ms.features.refunds.presentation import router as refunds_router
from hotdel_refund_ms.shared.core.logging import configure_logging, get_logger
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.infrastructure.database import close_db, init_db
from hotdel_refund_ms.shared.presentation import register_exception_handlers

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "service_starting",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
        order_store=settings.order_store,
        notification_backend=settings.notification_backend,
    )

    # The orders table belongs to the marketplace API; only connect to it
    if settings.order_store == "database":
        await init_db()

    yield

    if settings.order_store == "database":
        await close_db()
    logger.info("service_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Hot-Del Refund Microservice",
        description="Order cancellation, refund policy and mock payment gateway for the Hot-Del marketplace",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(refunds_router, prefix="/refund", tags=["Refunds"])
    app.include_router(payments_router, prefix="/payment/mock", tags=["Payments"])

    # Health endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"service": "Hot-Del Refund Microservice", "status": "running"}

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "refund-ms",
            "orderStore": settings.order_store,
        }

    return app


app = create_app()
