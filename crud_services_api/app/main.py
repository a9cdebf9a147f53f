"""
Main entrypoint for the CRUD services.

``create_app(service)`` builds the FastAPI application of a single
service: it sets up logging, installs the plain-text error handlers
and includes the service's router.  On startup the service's
database tables are created if missing.

The module-level ``app`` serves the service named by the ``SERVICE``
environment variable, e.g.::

    SERVICE=movies uvicorn crud_services_api.app.main:app --reload

``run.py`` starts several services side by side.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .api.router import ROUTERS, TAGS
from .core.config import settings
from .core.db import init_db
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the service's tables before the first request."""
    init_db(app.state.service)
    yield


def create_app(service: str) -> FastAPI:
    """Create and configure the application of ``service``.

    Parameters
    ----------
    service : str
        Service id, one of the keys of ``api.router.ROUTERS``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.

    Raises
    ------
    ValueError
        If ``service`` is not a known service id.
    """
    if service not in ROUTERS:
        raise ValueError(f"Unknown service {service!r}; expected one of {', '.join(ROUTERS)}")

    # Initialise logging before anything else so that the handlers
    # below can safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=f"{settings.project_name}: {service}",
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.service = service

    register_error_handlers(app)
    app.include_router(ROUTERS[service], tags=[TAGS[service]])
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app(settings.service)
