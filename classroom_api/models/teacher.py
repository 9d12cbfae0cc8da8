"""
Teacher entity schema.

Uniqueness of email and employeeId is not checked here; the unique indexes
on the teachers collection enforce it at write time.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from classroom_api.models.base import (
    EMAIL_PATTERN, EntitySchema, ValidationMode, coerce_datetime, run_validation, utcnow
)

REQUIRED_MESSAGES = {
    "name": "Please add a name",
    "email": "Please add an email",
    "phone": "Please add a phone number",
    "subjectsTaught": "Please add subjects taught",
    "employeeId": "Please add an employee ID",
}


class TeacherCreate(EntitySchema):
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1)
    address: Optional[str] = None
    hire_date: datetime = Field(default_factory=utcnow)
    is_active: bool = True
    subjects_taught: List[str] = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1)

    @field_validator("hire_date", mode="before")
    @classmethod
    def parse_hire_date(cls, value):
        return coerce_datetime(value)


class TeacherUpdate(EntitySchema):
    # Defaults are not validated, so an absent field stays unset while an
    # explicit null is still rejected for non-nullable fields.
    name: str = Field(None, min_length=1)
    email: str = Field(None, pattern=EMAIL_PATTERN)
    phone: str = Field(None, min_length=1)
    address: Optional[str] = None
    hire_date: datetime = None
    is_active: bool = None
    subjects_taught: List[str] = Field(None, min_length=1)
    employee_id: str = Field(None, min_length=1)

    @field_validator("hire_date", mode="before")
    @classmethod
    def parse_hire_date(cls, value):
        return coerce_datetime(value)


def validate_teacher(candidate, mode: ValidationMode = ValidationMode.create) -> dict:
    """Validate a Teacher candidate; see run_validation."""
    schema = TeacherCreate if mode == ValidationMode.create else TeacherUpdate
    return run_validation(schema, candidate, mode, REQUIRED_MESSAGES)
