"""
Process entry point.

Startup is linear: settings -> pool (with retries) -> tables -> app -> listener.
Any failure before the listener opens exits the process with status 1.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Sequence

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config
from core.db import Database, StoreError, connect_with_retry
from core.dependencies import get_database
from core.logger import configure_logging
from core.schema import ensure_tables
from students import repository as student_repository
from students import router as students_router
from teachers import router as teachers_router

logger = logging.getLogger(__name__)

# DB_PORT default; a stock PostgreSQL server is on 5432 instead.
MYSQL_DEFAULT_PORT = 3306


def create_app(database: Database, *, cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """
    Build the FastAPI app around an already-connected `database`.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            logger.info("shutting_down closing_pool")
            await app.state.database.close()

    app = FastAPI(title="School Records API", lifespan=lifespan)
    app.state.database = database

    origins = list(cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Validation error",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error("store_error method=%s path=%s error=%s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Database operation failed."},
        )

    app.include_router(students_router, tags=["students"])
    app.include_router(teachers_router, tags=["teachers"])

    # Liveness probe
    @app.get("/health")
    async def health() -> dict:
        return {"status": "UP"}

    # Readiness probe
    @app.get("/ready")
    async def ready(database: Database = Depends(get_database)):
        if await database.ping():
            return {"status": "READY"}
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "NOT_READY"},
        )

    @app.get("/")
    async def root(database: Database = Depends(get_database)) -> dict:
        students = await student_repository.list_students(database)
        return {"message": "From Backend", "studentData": students}

    return app


async def startup(settings: config.Settings) -> Database:
    """
    Connect and bootstrap the schema. Raises on failure; the pool is closed first.
    """
    if settings.db_port == MYSQL_DEFAULT_PORT:
        logger.warning(
            "db_port_default port=%s hint=set DB_PORT (PostgreSQL listens on 5432 by default)",
            settings.db_port,
        )
    database = await connect_with_retry(
        settings,
        max_attempts=settings.connect_retries,
        delay_s=settings.connect_delay_s,
    )
    try:
        await ensure_tables(database)
    except Exception:
        await database.close()
        raise
    return database


async def serve(settings: config.Settings) -> None:
    database = await startup(settings)
    app = create_app(database, cors_origins=settings.cors_origins)
    # log_config=None keeps our handler instead of uvicorn's default dictConfig.
    server = uvicorn.Server(
        uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
    )
    logger.info("server_starting host=%s port=%s", settings.host, settings.port)
    await server.serve()


def main() -> None:
    try:
        settings = config.load_settings()
    except config.ConfigError as exc:
        configure_logging()
        logger.error("config_error %s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except Exception:
        logger.exception("startup_failed could not start server")
        sys.exit(1)


if __name__ == "__main__":
    main()
