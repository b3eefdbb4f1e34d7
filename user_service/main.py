"""User Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage opened once on startup and closed on shutdown via the lifespan
    - UserStorage and UserService live on app.state, never in module globals

Design Decisions:
    - Lifespan over @app.on_event
    - Three error handler layers: UserServiceError (domain), RequestValidationError
      (Pydantic), Exception (catch-all)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, users
from user_service.config import get_settings
from user_service.infrastructure.observability import setup_logging
from user_service.infrastructure.storage_factory import open_user_storage
from user_service.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    storage = await open_user_storage(settings)
    app.state.user_storage = storage
    app.state.user_service = UserService(storage.repository)
    logger.info(
        "User Service API started", extra={"backend": storage.backend.value},
    )
    yield
    logger.info("User Service API shutting down")
    await storage.close()


app = FastAPI(
    title="User Service API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
