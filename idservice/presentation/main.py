import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, APIRouter
from fastapi.exceptions import RequestValidationError
import uvicorn
from contextlib import asynccontextmanager

from idservice.core.exceptions import (
    IdentifierAllocationError,
    allocation_exception_handler,
    general_exception_handler,
    validation_exception_handler,
)
from idservice.core.middleware import RequestLoggingMiddleware
from idservice.presentation.api.v1.routers import identifiers
from idservice.presentation.api.v1.routers import health
from idservice.core.config import settings


def configure_logging() -> None:
    """Log to the console and to a rotating file."""
    log_handlers = [logging.StreamHandler()]
    if settings.log_file:
        os.makedirs(os.path.dirname(settings.log_file) or ".", exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                settings.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
    )


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    configure_logging()
    logger.info(
        "Starting Component Identifier API (store backend: %s)...", settings.store_backend
    )
    yield
    logger.info("Shutting down Component Identifier API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IdentifierAllocationError, allocation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(identifiers.router, tags=["identifiers"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


# Create application instance
app = create_application()

if __name__ == "__main__":
    dev_mode = os.getenv("DEV_MODE", "false").lower() == "true"
    uvicorn.run(
        "idservice.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )
