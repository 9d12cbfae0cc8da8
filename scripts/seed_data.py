#!/usr/bin/env python3
"""
Seed Script

Creates a sample teacher and two students through the services (same
validation and reference checks as the API).
Run: python scripts/seed_data.py
"""
import sys
sys.path.insert(0, '.')

from classroom_api.core import errors
from classroom_api.db.mongodb import test_mongo_connection, init_mongo_indexes
from classroom_api.services.teacher_service import TeacherService
from classroom_api.services.student_service import StudentService


SAMPLE_TEACHER = {
    "name": "Ada Lovelace",
    "email": "ada.lovelace@example.com",
    "phone": "123-456-7890",
    "address": "12 St James's Square",
    "subjectsTaught": ["Math", "Computing"],
    "employeeId": "EMP001"
}

SAMPLE_STUDENTS = [
    {"name": "Bo Smith", "email": "bo.smith@example.com", "dateOfBirth": "2010-01-01"},
    {"name": "Cy Jones", "email": "cy.jones@example.com", "dateOfBirth": "2011-05-17"},
]


def seed_teacher(service: TeacherService) -> dict:
    """Create the sample teacher, or reuse it if the seed already ran."""
    print("\n[1] Seeding teacher...")
    try:
        teacher = service.create(SAMPLE_TEACHER)
        print(f"    ✅ Created teacher: {teacher['id']}")
    except errors.DuplicateKeyError:
        # The collision may be on either unique key
        teacher = next(
            (t for t in service.list_all()
             if t["employeeId"] == SAMPLE_TEACHER["employeeId"] or t["email"] == SAMPLE_TEACHER["email"]),
            None
        )
        if teacher is None:
            raise
        print(f"    ⚠️  Teacher already exists: {teacher['id']}")
    return teacher


def seed_students(service: StudentService, teacher_id: str):
    print("\n[2] Seeding students...")
    for sample in SAMPLE_STUDENTS:
        try:
            student = service.create({**sample, "teacher": teacher_id})
            print(f"    ✅ Created student: {student['name']} -> {student['teacher']['name']}")
        except errors.DuplicateKeyError:
            print(f"    ⚠️  Student already exists: {sample['email']}")


def main():
    print("=" * 60)
    print("CLASSROOM SEED")
    print("=" * 60)

    if not test_mongo_connection():
        print("❌ MongoDB connection failed!")
        return

    init_mongo_indexes()

    teacher = seed_teacher(TeacherService())
    seed_students(StudentService(), teacher["id"])

    print("\n" + "=" * 60)
    print("✅ Seed complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
