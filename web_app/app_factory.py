"""FastAPI application factory."""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api import api_router
from .api.routes import INVALID_REQUEST_MESSAGE, error_response
from .web import web_router
from .middleware.logging import LoggingMiddleware
from shortlink.common.logging_config import get_logger


def create_app(
    service_instance,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (may be set later by the lifespan)
        config: Configuration instance
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlink",
        description="URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or get_logger()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(RequestValidationError)
    async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        app.state.logger.info(f"Malformed request to {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)

    static_path = os.path.join(os.path.dirname(__file__), "static")
    if os.path.exists(static_path):
        app.mount("/static", StaticFiles(directory=static_path), name="static")

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
