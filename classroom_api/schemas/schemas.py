"""
Pydantic Schemas - Response shapes

All API response schemas in one file for simplicity. Request bodies are
validated by the entity schemas in classroom_api.models so that every
failure is reported as a 400 with a per-field map.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# TEACHER SCHEMAS
# ============================================================

class TeacherResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    hire_date: datetime
    is_active: bool
    subjects_taught: List[str]
    employee_id: str
    created_at: datetime
    updated_at: datetime

class TeacherDeleteResponse(CamelModel):
    message: str
    deleted_teacher: TeacherResponse


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class TeacherSummary(CamelModel):
    """Join-expanded teacher reference; name/email are None if the teacher is gone."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

class StudentResponse(CamelModel):
    id: str
    name: str
    email: str
    teacher: TeacherSummary
    date_of_birth: datetime
    created_at: datetime
    updated_at: datetime

class StudentDeleteResponse(CamelModel):
    message: str
    deleted_student: StudentResponse


# ============================================================
# AUTH SCHEMAS
# ============================================================

class UserResponse(CamelModel):
    id: str
    github_id: str
    username: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    message: str
    errors: Optional[Dict[str, str]] = None
    field: Optional[str] = None
