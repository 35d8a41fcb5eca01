"""
Async database access helpers (raw SQL) using asyncpg.

`connect_with_retry()` opens the pool during startup and hands back a
`Database` handle. The handle is passed to `create_app()` (see
`api/main.py`) and closed by the app lifespan on shutdown.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import asyncpg

from .config import Settings

logger = logging.getLogger(__name__)

# Range of the BIGINT id columns.
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1

# Failures that mean "the store could not run this", as opposed to bugs in our code.
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


# Store failures are explicit and separable from other runtime errors.
class StoreError(RuntimeError):
    pass


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Thin wrapper around an asyncpg pool.

    The pool caps physical connections at `max_size`; extra callers wait in
    `acquire()` with no timeout, so a saturated pool means slower requests
    rather than failed ones.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self._pool.fetchrow(sql, *args)
        except DRIVER_ERRORS as exc:
            logger.error("query_failed error=%r", exc)
            raise StoreError(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self._pool.fetch(sql, *args)
        except DRIVER_ERRORS as exc:
            logger.error("query_failed error=%r", exc)
            raise StoreError(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag.
        """
        try:
            return await self._pool.execute(sql, *args)
        except DRIVER_ERRORS as exc:
            logger.error("statement_failed error=%r", exc)
            raise StoreError(str(exc)) from exc

    async def ping(self) -> bool:
        try:
            await self._pool.fetchval("SELECT 1")
        except DRIVER_ERRORS as exc:
            logger.warning("ping_failed error=%r", exc)
            return False
        return True

    async def close(self) -> None:
        await self._pool.close()


def _ssl_context(ca_path: str | None) -> ssl.SSLContext | None:
    if not ca_path:
        return None
    return ssl.create_default_context(cafile=ca_path)


async def create_pool(settings: Settings) -> asyncpg.Pool:
    return await asyncpg.create_pool(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_name,
        ssl=_ssl_context(settings.db_ssl_ca),
        min_size=1,
        max_size=settings.db_pool_size,
        command_timeout=None,
    )


async def connect_with_retry(
    settings: Settings,
    *,
    max_attempts: int = 10,
    delay_s: float = 3.0,
) -> Database:
    """
    Open the pool and validate it with `SELECT 1`, retrying with a fixed delay.

    The error from the last attempt propagates once `max_attempts` is used up.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1.")

    for attempt in range(1, max_attempts + 1):
        pool: asyncpg.Pool | None = None
        try:
            pool = await create_pool(settings)
            await pool.fetchval("SELECT 1")
        except Exception as exc:
            logger.error(
                "db_connect_failed attempt=%s/%s error=%r",
                attempt,
                max_attempts,
                exc,
            )
            if pool is not None:
                pool.terminate()
            if attempt == max_attempts:
                raise
            logger.info("db_connect_retry delay_s=%s", delay_s)
            await asyncio.sleep(delay_s)
        else:
            logger.info("db_connected attempt=%s host=%s", attempt, settings.db_host)
            return Database(pool)
