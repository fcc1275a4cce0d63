"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error_handlers import register_error_handlers
from src.api.routes import bidders, bids, health
from src.application.interfaces.event_publisher import EventPublisher
from src.config import Settings
from src.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    create_schema,
)
from src.infrastructure.messaging.noop_publisher import NoOpEventPublisher
from src.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher
from src.log_config import configure_logging

logger = structlog.get_logger(__name__)


def _build_event_publisher(settings: Settings) -> EventPublisher:
    if settings.rabbitmq_url:
        return RabbitMQPublisher(settings.rabbitmq_url)
    return NoOpEventPublisher()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info("bid_orchestrator_starting")

    if settings.create_schema_on_startup:
        await create_schema(app.state.engine)

    app.state.http_client = httpx.AsyncClient(timeout=settings.chat_gateway_timeout_seconds)
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        await app.state.engine.dispose()
        logger.info("bid_orchestrator_stopping")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Bid Orchestrator",
        description="Bid windows, ranked bidder offers and seller acceptance for listings.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.event_publisher = _build_event_publisher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(bids.router)
    app.include_router(bidders.router)

    return app


app = create_app()
