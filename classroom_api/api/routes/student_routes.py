"""
Student Routes

GET /students - List all students (teacher expanded)
GET /students/{student_id} - Get one student (teacher expanded)
POST /students - Create student (login required)
PUT /students/{student_id} - Partial update (login required)
DELETE /students/{student_id} - Delete student (login required)
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from classroom_api.core.auth import require_auth
from classroom_api.services.student_service import StudentService
from classroom_api.schemas.schemas import StudentResponse, StudentDeleteResponse, ErrorResponse

router = APIRouter(
    prefix="/students",
    tags=["Students"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)

STUDENT_EXAMPLE = {
    "name": "Jane Smith",
    "email": "jane.smith@example.com",
    "teacher": "60c72b2f9b1e8e0015f8a2c1",
    "dateOfBirth": "2010-01-01"
}


def get_student_service() -> StudentService:
    return StudentService()


@router.get("", response_model=List[StudentResponse])
def list_students(service: StudentService = Depends(get_student_service)):
    """Retrieve all students, each with its teacher's name and email."""
    return service.list_all()


@router.get("/{student_id}", response_model=StudentResponse, responses={404: {"model": ErrorResponse}})
def get_student(student_id: str, service: StudentService = Depends(get_student_service)):
    """Retrieve a single student by ID."""
    return service.get(student_id)


@router.post("", response_model=StudentResponse, status_code=201, dependencies=[Depends(require_auth)])
def create_student(
    payload: Any = Body(..., examples=[STUDENT_EXAMPLE]),
    service: StudentService = Depends(get_student_service)
):
    """
    Create a new student.

    `teacher` must be the ID of an existing teacher.
    """
    return service.create(payload)


@router.put("/{student_id}", response_model=StudentResponse, dependencies=[Depends(require_auth)],
            responses={404: {"model": ErrorResponse}})
def update_student(
    student_id: str,
    payload: Any = Body(..., examples=[{"name": "Jane Johnson"}]),
    service: StudentService = Depends(get_student_service)
):
    """Update an existing student. Only provided fields are updated."""
    return service.update(student_id, payload)


@router.delete("/{student_id}", response_model=StudentDeleteResponse, dependencies=[Depends(require_auth)],
               responses={404: {"model": ErrorResponse}})
def delete_student(student_id: str, service: StudentService = Depends(get_student_service)):
    """Delete a student by ID."""
    deleted = service.delete(student_id)
    return {"message": "Student deleted successfully", "deletedStudent": deleted}
