"""
Schemas module - Response schemas for API endpoints.

Difference from models:
- Models: validation of what may be stored
- Schemas: API contract (what client receives)
"""

from classroom_api.schemas.schemas import (
    TeacherResponse, TeacherDeleteResponse, TeacherSummary,
    StudentResponse, StudentDeleteResponse,
    UserResponse, MessageResponse, ErrorResponse
)

__all__ = [
    "TeacherResponse", "TeacherDeleteResponse", "TeacherSummary",
    "StudentResponse", "StudentDeleteResponse",
    "UserResponse", "MessageResponse", "ErrorResponse"
]
