"""HackerClone API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HackerCloneError → structured JSON responses
    - Settings, pool and secret are loaded once in the lifespan; a missing secret or URL,
      or an unreachable database, aborts startup
    - The AppContext lives on app.state; nothing is stored in module globals

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app(context=...) lets tests inject a context built on a temp database;
      the lifespan then leaves that context's lifecycle to the caller
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hackerclone.api.error_handlers import register_error_handlers
from hackerclone.api.routes import auth, health, posts, users
from hackerclone.config import get_settings
from hackerclone.context import AppContext, build_context
from hackerclone.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    injected = getattr(app.state, "context", None)
    if injected is not None:
        yield
        return

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    context = build_context(settings)
    try:
        await context.db.ping()
    except Exception:
        logger.critical("Database unreachable at startup", exc_info=True)
        await context.close()
        raise
    app.state.context = context
    logger.info("HackerClone API started")
    try:
        yield
    finally:
        logger.info("HackerClone API shutting down")
        await context.close()
        app.state.context = None


def create_app(context: AppContext | None = None) -> FastAPI:
    app = FastAPI(title="HackerClone API", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
