"""
FastAPI application for the dedications service.

The SQLite store is opened once in the lifespan, handed to the entry
service, and closed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dedications import __version__
from dedications.config import Settings, load_settings
from dedications.errors import DedicationsError
from dedications.service import EntryService, utc_now
from dedications.storage import Database, EntryRepository
from dedications.web.routes import entries as entries_route

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    clock: Callable[[], str] = utc_now,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database = Database(settings.db_path)
        database.open()
        database.init_schema()
        app.state.database = database
        app.state.entry_service = EntryService(EntryRepository(database), clock=clock)
        try:
            yield
        finally:
            database.close()

    app = FastAPI(
        title="Dedications",
        description="Manage charitable dedication entries",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DedicationsError)
    async def dedications_error_handler(_: Request, exc: DedicationsError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        # A non-integer id can never match a stored entry.
        if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
            return JSONResponse(status_code=404, content={"error": "Entry not found"})
        return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})

    app.include_router(entries_route.router, tags=["entries"])

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok"}

    return app


def run_server(settings: Settings) -> None:
    """Run the FastAPI server with uvicorn.

    Args:
        settings: Bind address, port, log level and database location.
    """
    import uvicorn

    logger.info("Starting dedications API at http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
