"""
Teacher API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.db import Database
from core.dependencies import get_database

from . import repository, schemas

router = APIRouter()


@router.get("/teacher")
async def list_teachers(database: Database = Depends(get_database)) -> list[dict]:
    return await repository.list_teachers(database)


@router.post("/addteacher", status_code=status.HTTP_201_CREATED)
async def add_teacher(
    request: schemas.TeacherCreateRequest,
    database: Database = Depends(get_database),
) -> dict:
    teacher_id = await repository.insert_teacher(
        database,
        name=request.name,
        subject=request.subject,
        class_name=request.class_name,
    )
    return {"message": "Teacher added successfully", "id": teacher_id}


@router.delete("/teacher/{teacher_id}")
async def delete_teacher(
    teacher_id: int,
    database: Database = Depends(get_database),
) -> dict:
    await repository.delete_teacher(database, teacher_id)
    return {"message": "Teacher deleted successfully"}
