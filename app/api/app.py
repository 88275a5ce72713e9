import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.db.engine import init_db
from app.logging_config import configure_logging
from app.api.middleware import SecurityHeadersMiddleware
from app.api.errors import register_error_handlers
from app.api.routers.bugs import router as bugs_router
from app.api.routers.health import router as health_router
from app.services.notifier import WebhookNotifier

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(app.state.settings.log_level)
    init_db()
    logger.info("Bug tracker started (environment=%s)", app.state.settings.environment)
    try:
        yield
    finally:
        # Shutdown
        logger.info("Bug tracker shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Bug Tracker", lifespan=lifespan, debug=False)
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.notifier = WebhookNotifier(settings.webhook_url, timeout=settings.webhook_timeout_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=not settings.is_development)
    register_error_handlers(app, debug=settings.is_development)

    app.include_router(health_router)
    app.include_router(bugs_router)

    return app


app = create_app()
