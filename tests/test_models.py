from datetime import datetime, timezone

import pytest
from bson import ObjectId

from classroom_api.core import errors
from classroom_api.models import ValidationMode, validate_student, validate_teacher
from classroom_api.models.base import coerce_datetime

TEACHER = {
    "name": "Ada",
    "email": "ada@x.com",
    "phone": "123",
    "subjectsTaught": ["Math"],
    "employeeId": "E1",
}


def test_teacher_defaults():
    record = validate_teacher(dict(TEACHER))
    assert record["isActive"] is True
    assert isinstance(record["hireDate"], datetime)
    assert "address" not in record


def test_teacher_drops_unknown_fields():
    record = validate_teacher({**TEACHER, "salary": 100, "_id": "x"})
    assert "salary" not in record
    assert "_id" not in record


def test_teacher_accepts_snake_case_keys():
    record = validate_teacher({
        "name": "Ada", "email": "ada@x.com", "phone": "1",
        "subjects_taught": ["Math"], "employee_id": "E1",
    })
    assert record["employeeId"] == "E1"
    assert record["subjectsTaught"] == ["Math"]


@pytest.mark.parametrize("email", [
    "ada@x", "ada.x.com", "ada@x.comma", "@x.com", "ada @x.com",
    # word characters are ASCII only
    "josé@x.com", "ada@exämple.com",
])
def test_teacher_rejects_bad_email(email):
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher({**TEACHER, "email": email})
    assert exc_info.value.errors == {"email": "Please add a valid email"}


@pytest.mark.parametrize("email", ["ada@x.com", "ada.lovelace@school.co.uk", "a-b@x-y.org"])
def test_teacher_accepts_good_email(email):
    assert validate_teacher({**TEACHER, "email": email})["email"] == email


def test_teacher_blank_name_is_missing():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher({**TEACHER, "name": "   "})
    assert exc_info.value.errors == {"name": "Please add a name"}


def test_validation_error_body():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher({**TEACHER, "phone": None})
    body = exc_info.value.to_dict()
    assert body["message"] == "Validation failed"
    assert set(body["errors"]) == {"phone"}


def test_non_object_candidate():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher("Ada")
    assert "body" in exc_info.value.errors


def test_teacher_update_only_supplied_fields():
    changes = validate_teacher({"phone": "987"}, ValidationMode.update)
    assert changes == {"phone": "987"}


def test_teacher_update_rejects_explicit_null():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher({"employeeId": None}, ValidationMode.update)
    assert "employeeId" in exc_info.value.errors


def test_teacher_update_allows_clearing_address():
    assert validate_teacher({"address": None}, ValidationMode.update) == {"address": None}


def test_teacher_update_validates_supplied_fields():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_teacher({"subjectsTaught": [], "email": "bad"}, ValidationMode.update)
    assert set(exc_info.value.errors) == {"subjectsTaught", "email"}


def test_hire_date_plain_date():
    record = validate_teacher({**TEACHER, "hireDate": "2023-09-01"})
    assert record["hireDate"] == datetime(2023, 9, 1, tzinfo=timezone.utc)


def test_coerce_datetime_leaves_other_values():
    assert coerce_datetime("2023-09-01T10:30:00Z") == "2023-09-01T10:30:00Z"
    assert coerce_datetime("not-a-day") == "not-a-day"


def test_student_teacher_converted_to_object_id():
    teacher_id = str(ObjectId())
    record = validate_student({
        "name": "Bo", "email": "bo@x.com", "teacher": teacher_id, "dateOfBirth": "2010-01-01",
    })
    assert record["teacher"] == ObjectId(teacher_id)
    assert record["dateOfBirth"] == datetime(2010, 1, 1, tzinfo=timezone.utc)


def test_student_invalid_teacher_id():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_student({"teacher": "123"}, ValidationMode.update)
    assert exc_info.value.errors == {"teacher": "Invalid teacher ID"}


def test_student_invalid_date_of_birth():
    with pytest.raises(errors.ValidationError) as exc_info:
        validate_student({"dateOfBirth": "yesterday"}, ValidationMode.update)
    assert "dateOfBirth" in exc_info.value.errors


def test_student_update_without_teacher():
    assert validate_student({"name": "Bob"}, ValidationMode.update) == {"name": "Bob"}
