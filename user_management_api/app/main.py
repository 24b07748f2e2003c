"""
Main entrypoint for the User Management API.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn user_management_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers the request validation handler and
    mounts the API router under ``/api``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    if setup_logging(settings.log_level, settings.log_file):
        logging.getLogger(__name__).info(
            "Logging configured at %s%s",
            settings.log_level.upper(),
            f", writing to {settings.log_file}" if settings.log_file else "",
        )

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Invalid payloads and path parameters are client errors (400),
        # not FastAPI's default 422.
        logging.getLogger(__name__).info("Rejected %s %s: invalid request", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date.
        version = init_db()
        logging.getLogger(__name__).info("Database ready at schema version %s", version)

    return app


app = create_app()
