"""
Main entrypoint for the Contact Keeper API.

``create_app`` builds the FastAPI application: it configures logging,
registers the error handlers that turn ``ApiError`` instances,
request validation failures and any other exception into JSON
responses, mounts the API router under ``/api`` and creates the
database schema on startup.
An instance is created at import time as ``app`` so it can be served
directly, e.g.::

    uvicorn contact_keeper_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ApiError, Forbidden, InternalError
from .core.logging_config import setup_logging
from .schemas.common import Message

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    status_code = settings.ownership_denied_status if isinstance(exc, Forbidden) else exc.status_code
    return JSONResponse(status_code=status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request data as a 400 with an ``errors`` list."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        errors.append(
            {
                "msg": error.get("msg", "invalid value"),
                "param": ".".join(loc[1:]) or (loc[0] if loc else ""),
                "location": loc[0] if loc else "body",
            }
        )
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"errors": errors})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for exceptions no other handler claimed."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=InternalError().to_body())


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_model=Message, tags=["info"])
    async def welcome() -> Message:
        return Message(msg="welcome to contact-keeper API")

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()
        logger.info("%s %s ready", settings.project_name, settings.api_version)

    return app


# Created at import time so uvicorn can discover it without calling
# create_app manually.
app = create_app()
