"""
Teacher persistence.
"""

from __future__ import annotations

from typing import Any

from core.db import BIGINT_MAX, BIGINT_MIN, Database, StoreError


async def list_teachers(database: Database) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT id, name, subject, "class", created_at
        FROM teacher
        ORDER BY id
        """
    )


async def insert_teacher(
    database: Database,
    *,
    name: str,
    subject: str,
    class_name: str,
) -> int:
    row = await database.fetch_one(
        """
        INSERT INTO teacher (name, subject, "class")
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        name,
        subject,
        class_name,
    )
    if row is None or "id" not in row:
        raise StoreError("Failed to insert teacher.")
    return int(row["id"])


async def delete_teacher(database: Database, teacher_id: int) -> None:
    if not BIGINT_MIN <= teacher_id <= BIGINT_MAX:
        return
    await database.execute("DELETE FROM teacher WHERE id = $1", teacher_id)
