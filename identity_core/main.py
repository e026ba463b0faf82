"""Identity Core API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {name, message, action, status_code}
    - CORS configured from settings (not hardcoded)
    - Connection gateway initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: one place owns startup and shutdown
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from identity_core.api.error_handlers import register_error_handlers
from identity_core.api.routes import migrations, sessions, status, users
from identity_core.config import get_settings
from identity_core.infrastructure.database import init_gateway
from identity_core.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    gateway = init_gateway(settings)
    logger.info(f"Identity Core API started ({settings.environment.value})")
    yield
    await gateway.dispose()
    logger.info("Identity Core API shutting down")


app = FastAPI(
    title="Identity Core API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

# Routes, registered explicitly
app.include_router(status.router)
app.include_router(migrations.router)
app.include_router(users.router)
app.include_router(sessions.router)

register_error_handlers(app)
