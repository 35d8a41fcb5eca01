"""
Schema bootstrap.

Creates the `student` and `teacher` tables when they are missing. Safe to run
on every startup (CREATE TABLE IF NOT EXISTS). Ids come from identity columns,
so the store assigns them and they never change afterwards.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

STUDENT_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS student (
  id          BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
  name        VARCHAR(255) NOT NULL,
  roll_number VARCHAR(255) NOT NULL,
  "class"     VARCHAR(255) NOT NULL,
  created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

TEACHER_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS teacher (
  id          BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
  name        VARCHAR(255) NOT NULL,
  subject     VARCHAR(255) NOT NULL,
  "class"     VARCHAR(255) NOT NULL,
  created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

TABLES = (
    ("student", STUDENT_TABLE_SQL),
    ("teacher", TEACHER_TABLE_SQL),
)


async def ensure_tables(database: Database) -> None:
    for name, sql in TABLES:
        try:
            await database.execute(sql)
        except Exception:
            logger.exception("ensure_table_failed table=%s", name)
            raise
    logger.info("tables_ensured tables=%s", ",".join(name for name, _ in TABLES))
