"""
Student API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.db import Database
from core.dependencies import get_database

from . import repository, schemas

router = APIRouter()


@router.get("/student")
async def list_students(database: Database = Depends(get_database)) -> list[dict]:
    return await repository.list_students(database)


@router.post("/addstudent", status_code=status.HTTP_201_CREATED)
async def add_student(
    request: schemas.StudentCreateRequest,
    database: Database = Depends(get_database),
) -> dict:
    student_id = await repository.insert_student(
        database,
        name=request.name,
        roll_number=request.roll_no,
        class_name=request.class_name,
    )
    return {"message": "Student added successfully", "id": student_id}


@router.delete("/student/{student_id}")
async def delete_student(
    student_id: int,
    database: Database = Depends(get_database),
) -> dict:
    """
    Delete one student. Succeeds whether or not the id existed.
    """
    await repository.delete_student(database, student_id)
    return {"message": "Student deleted successfully"}
