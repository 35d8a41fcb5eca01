from __future__ import annotations

import asyncio

import pytest

from core.db import StoreError
from core.schema import ensure_tables


def test_creates_both_tables_idempotently(fake_db):
    asyncio.run(ensure_tables(fake_db))
    asyncio.run(ensure_tables(fake_db))

    assert len(fake_db.statements) == 4
    for sql in fake_db.statements:
        assert "CREATE TABLE IF NOT EXISTS" in sql
    assert "student" in fake_db.statements[0]
    assert "teacher" in fake_db.statements[1]


def test_identity_and_timestamp_columns(fake_db):
    asyncio.run(ensure_tables(fake_db))
    for sql in fake_db.statements:
        assert "GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY" in sql
        assert "created_at" in sql and "DEFAULT now()" in sql


def test_failure_propagates(fake_db):
    fake_db.available = False
    with pytest.raises(StoreError):
        asyncio.run(ensure_tables(fake_db))
