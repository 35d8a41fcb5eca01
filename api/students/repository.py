"""
Student persistence.
"""

from __future__ import annotations

from typing import Any

from core.db import BIGINT_MAX, BIGINT_MIN, Database, StoreError


async def list_students(database: Database) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT id, name, roll_number, "class", created_at
        FROM student
        ORDER BY id
        """
    )


async def insert_student(
    database: Database,
    *,
    name: str,
    roll_number: str,
    class_name: str,
) -> int:
    """
    Insert a student and return the id the store assigned.
    """
    row = await database.fetch_one(
        """
        INSERT INTO student (name, roll_number, "class")
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        name,
        roll_number,
        class_name,
    )
    if row is None or "id" not in row:
        raise StoreError("Failed to insert student.")
    return int(row["id"])


async def delete_student(database: Database, student_id: int) -> None:
    if not BIGINT_MIN <= student_id <= BIGINT_MAX:
        # Cannot match any row, and asyncpg would refuse to encode it.
        return
    # Other rows keep their ids; nothing is renumbered.
    await database.execute("DELETE FROM student WHERE id = $1", student_id)
