"""
Pydantic schemas for teacher endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TeacherCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    class_name: str = Field(..., alias="class", min_length=1)

    @field_validator("name", "subject", "class_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value
