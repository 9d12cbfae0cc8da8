"""
Teacher Routes

GET /teachers - List all teachers
GET /teachers/{teacher_id} - Get one teacher
POST /teachers - Create teacher (login required)
PUT /teachers/{teacher_id} - Partial update (login required)
DELETE /teachers/{teacher_id} - Delete teacher (login required)
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from classroom_api.core.auth import require_auth
from classroom_api.services.teacher_service import TeacherService
from classroom_api.schemas.schemas import TeacherResponse, TeacherDeleteResponse, ErrorResponse

router = APIRouter(
    prefix="/teachers",
    tags=["Teachers"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)

TEACHER_EXAMPLE = {
    "name": "John Doe",
    "email": "john.doe@example.com",
    "phone": "123-456-7890",
    "address": "123 Main St",
    "hireDate": "2023-09-01T00:00:00.000Z",
    "isActive": True,
    "subjectsTaught": ["Math", "Physics"],
    "employeeId": "EMP001"
}


def get_teacher_service() -> TeacherService:
    return TeacherService()


@router.get("", response_model=List[TeacherResponse])
def list_teachers(service: TeacherService = Depends(get_teacher_service)):
    """Retrieve a list of all teachers."""
    return service.list_all()


@router.get("/{teacher_id}", response_model=TeacherResponse, responses={404: {"model": ErrorResponse}})
def get_teacher(teacher_id: str, service: TeacherService = Depends(get_teacher_service)):
    """Retrieve a single teacher by ID."""
    return service.get(teacher_id)


@router.post("", response_model=TeacherResponse, status_code=201, dependencies=[Depends(require_auth)])
def create_teacher(
    payload: Any = Body(..., examples=[TEACHER_EXAMPLE]),
    service: TeacherService = Depends(get_teacher_service)
):
    """
    Create a new teacher.

    Required: name, email, phone, subjectsTaught, employeeId.
    email and employeeId must be unique.
    """
    return service.create(payload)


@router.put("/{teacher_id}", response_model=TeacherResponse, dependencies=[Depends(require_auth)],
            responses={404: {"model": ErrorResponse}})
def update_teacher(
    teacher_id: str,
    payload: Any = Body(..., examples=[{"name": "Johnathan Doe", "phone": "987-654-3210", "isActive": False}]),
    service: TeacherService = Depends(get_teacher_service)
):
    """Update an existing teacher. Only provided fields are updated."""
    return service.update(teacher_id, payload)


@router.delete("/{teacher_id}", response_model=TeacherDeleteResponse, dependencies=[Depends(require_auth)],
               responses={404: {"model": ErrorResponse}})
def delete_teacher(teacher_id: str, service: TeacherService = Depends(get_teacher_service)):
    """Delete a teacher. Students assigned to it keep their (now dangling) reference."""
    deleted = service.delete(teacher_id)
    return {"message": "Teacher deleted successfully", "deletedTeacher": deleted}
