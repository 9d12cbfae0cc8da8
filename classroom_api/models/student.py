"""
Student entity schema.

`teacher` must look like an ObjectId here; whether that Teacher exists is
checked by StudentService before the write.
"""

from datetime import datetime

from bson import ObjectId
from pydantic import Field, field_validator

from classroom_api.models.base import (
    EMAIL_PATTERN, EntitySchema, ValidationMode, coerce_datetime, run_validation
)

REQUIRED_MESSAGES = {
    "name": "Please add a name",
    "email": "Please add an email",
    "teacher": "Please assign a teacher to this student",
    "dateOfBirth": "Please add a date of birth",
}


def _check_teacher_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError("Invalid teacher ID")
    return value


class StudentCreate(EntitySchema):
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    teacher: str = Field(..., min_length=1)
    date_of_birth: datetime

    @field_validator("teacher")
    @classmethod
    def check_teacher_id(cls, value):
        return _check_teacher_id(value)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value):
        return coerce_datetime(value)


class StudentUpdate(EntitySchema):
    name: str = Field(None, min_length=1)
    email: str = Field(None, pattern=EMAIL_PATTERN)
    teacher: str = Field(None, min_length=1)
    date_of_birth: datetime = None

    @field_validator("teacher")
    @classmethod
    def check_teacher_id(cls, value):
        return _check_teacher_id(value)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value):
        return coerce_datetime(value)


def validate_student(candidate, mode: ValidationMode = ValidationMode.create) -> dict:
    """
    Validate a Student candidate; see run_validation.

    The returned `teacher` is converted to an ObjectId so it is stored as a
    reference, not a string.
    """
    schema = StudentCreate if mode == ValidationMode.create else StudentUpdate
    record = run_validation(schema, candidate, mode, REQUIRED_MESSAGES)
    if "teacher" in record:
        record["teacher"] = ObjectId(record["teacher"])
    return record
