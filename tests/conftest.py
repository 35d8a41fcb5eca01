from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.db import StoreError
from main import create_app

REQUIRED_ENV = {
    "DB_HOST": "db.internal",
    "DB_USER": "school",
    "DB_PASSWORD": "secret",
    "DB_NAME": "school",
}

_TABLE_RE = re.compile(r"\b(?:FROM|INTO|EXISTS)\s+(student|teacher)\b", re.IGNORECASE)

_COLUMNS = {
    "student": ("name", "roll_number", "class"),
    "teacher": ("name", "subject", "class"),
}


class FakeDatabase:
    """
    In-memory stand-in for core.db.Database.

    Understands just the statements the repositories issue.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {"student": [], "teacher": []}
        self.next_ids = {"student": 1, "teacher": 1}
        self.statements: list[str] = []
        self.available = True
        self.closed = False

    def _check(self, sql: str) -> str:
        if not self.available:
            raise StoreError("connection refused")
        self.statements.append(sql)
        match = _TABLE_RE.search(sql)
        assert match is not None, f"unexpected SQL: {sql}"
        return match.group(1).lower()

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        table = self._check(sql)
        return [dict(row) for row in sorted(self.tables[table], key=lambda r: r["id"])]

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        table = self._check(sql)
        assert sql.strip().upper().startswith("INSERT"), f"unexpected SQL: {sql}"
        row_id = self.next_ids[table]
        self.next_ids[table] += 1
        row = {"id": row_id, **dict(zip(_COLUMNS[table], args))}
        row["created_at"] = datetime.now(timezone.utc)
        self.tables[table].append(row)
        return {"id": row_id}

    async def execute(self, sql: str, *args: Any) -> str:
        table = self._check(sql)
        if sql.strip().upper().startswith("DELETE"):
            before = len(self.tables[table])
            self.tables[table] = [r for r in self.tables[table] if r["id"] != args[0]]
            return f"DELETE {before - len(self.tables[table])}"
        return "CREATE TABLE"

    async def ping(self) -> bool:
        return self.available

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase):
    with TestClient(create_app(fake_db)) as test_client:
        yield test_client


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(REQUIRED_ENV)
