from unittest.mock import MagicMock, patch

import httpx
import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, ServerSelectionTimeoutError

from classroom_api.core import errors
from classroom_api.core.config import Settings
from classroom_api.services.github_oauth import GitHubOAuthClient
from classroom_api.services.mongo_service import (
    duplicate_key_field, parse_object_id, serialize_doc, translate_errors
)
from classroom_api.services.student_service import StudentService
from classroom_api.services.teacher_service import TeacherService


def _duplicate(details=None, message="E11000 duplicate key error"):
    return MongoDuplicateKeyError(message, 11000, details)


# ============================================================
# MONGO HELPERS
# ============================================================

def test_serialize_doc():
    oid, ref = ObjectId(), ObjectId()
    assert serialize_doc({"_id": oid, "teacher": ref, "name": "Bo"}) == {
        "id": str(oid), "teacher": str(ref), "name": "Bo"
    }
    assert serialize_doc(None) is None


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    with pytest.raises(errors.MalformedIdError) as exc_info:
        parse_object_id("nope", "Teacher")
    assert exc_info.value.message == "Invalid Teacher ID"
    with pytest.raises(errors.MalformedIdError):
        parse_object_id(None)
    # bson would build an id from any 12 bytes
    with pytest.raises(errors.MalformedIdError):
        parse_object_id(b"twelve bytes")
    with pytest.raises(errors.MalformedIdError):
        parse_object_id(12345)


def test_duplicate_key_field_from_details():
    exc = _duplicate({"keyPattern": {"employeeId": 1}, "keyValue": {"employeeId": "E1"}})
    assert duplicate_key_field(exc) == "employeeId"


def test_duplicate_key_field_from_message():
    exc = _duplicate(message="E11000 duplicate key error collection: classroom.teachers index: email_1 dup key")
    assert duplicate_key_field(exc, ("email", "employeeId")) == "email"
    assert duplicate_key_field(exc, ("employeeId",)) is None


def test_translate_duplicate_key():
    with pytest.raises(errors.DuplicateKeyError) as exc_info:
        with translate_errors(("email",)):
            raise _duplicate({"keyPattern": {"email": 1}, "keyValue": {"email": "a@x.com"}})
    assert exc_info.value.field == "email"
    assert exc_info.value.value == "a@x.com"
    assert exc_info.value.status_code == 400
    assert exc_info.value.to_dict() == {"message": "A record with this email already exists", "field": "email"}


def test_translate_other_driver_errors():
    with pytest.raises(errors.PersistenceError) as exc_info:
        with translate_errors():
            raise ServerSelectionTimeoutError("no servers")
    assert exc_info.value.status_code == 500


def test_persistence_error_reaches_client(client):
    with patch.object(TeacherService, "list_all", side_effect=errors.PersistenceError()):
        response = client.get("/api/teachers")
    assert response.status_code == 500
    assert response.json() == {"message": "Server error accessing the database"}


# ============================================================
# SERVICES
# ============================================================

def test_check_teacher_exists(db, teacher):
    service = StudentService()
    assert service.check_teacher_exists(teacher["id"]) is True
    assert service.check_teacher_exists(str(ObjectId())) is False
    assert service.check_teacher_exists("nope") is False


def test_expand_teachers_batches_lookup(db, teacher):
    teachers = MagicMock()
    ref = ObjectId(teacher["id"])
    teachers.get_summaries.return_value = {ref: {"_id": ref, "name": "Ada", "email": "ada@x.com"}}
    service = StudentService(teachers=teachers)

    docs = [{"_id": ObjectId(), "name": "Bo", "teacher": ref} for _ in range(3)]
    expanded = service.expand_teachers(docs)

    teachers.get_summaries.assert_called_once_with({ref})
    assert all(s["teacher"] == {"id": teacher["id"], "name": "Ada", "email": "ada@x.com"} for s in expanded)


def test_student_create_checks_teacher_before_insert(db, student_payload):
    teachers = MagicMock()
    teachers.exists.return_value = False
    with pytest.raises(errors.ReferenceNotFoundError):
        StudentService(teachers=teachers).create(student_payload)
    assert db["students"].count_documents({}) == 0


def test_teacher_get_summaries_empty(db):
    assert TeacherService().get_summaries([]) == {}


# ============================================================
# GITHUB CLIENT
# ============================================================

def _response(status_code, json_body, url="https://github.com/login/oauth/access_token"):
    return httpx.Response(status_code, json=json_body, request=httpx.Request("GET", url))


@pytest.fixture
def github():
    settings = Settings(github_client_id="cid", github_client_secret="secret")
    return GitHubOAuthClient(settings)


def test_exchange_code(github):
    with patch("classroom_api.services.github_oauth.httpx.post",
               return_value=_response(200, {"access_token": "tok"})) as post:
        assert github.exchange_code("abc") == "tok"
    assert post.call_args.kwargs["data"]["code"] == "abc"
    assert post.call_args.kwargs["data"]["client_secret"] == "secret"


def test_exchange_code_bad_code(github):
    body = {"error": "bad_verification_code", "error_description": "The code passed is incorrect or expired."}
    with patch("classroom_api.services.github_oauth.httpx.post", return_value=_response(200, body)):
        with pytest.raises(errors.GitHubAuthError) as exc_info:
            github.exchange_code("abc")
    assert exc_info.value.message == "The code passed is incorrect or expired."


def test_exchange_code_network_failure(github):
    with patch("classroom_api.services.github_oauth.httpx.post", side_effect=httpx.ConnectError("down")):
        with pytest.raises(errors.GitHubAuthError):
            github.exchange_code("abc")


def test_fetch_profile_with_public_email(github):
    profile = {"id": 1, "login": "octocat", "email": "octo@x.com"}
    with patch("classroom_api.services.github_oauth.httpx.get", return_value=_response(200, profile)) as get:
        assert github.fetch_profile("tok") == profile
    get.assert_called_once()
    assert get.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"


def test_fetch_profile_fills_private_email(github):
    emails = [
        {"email": "old@x.com", "primary": False, "verified": True},
        {"email": "main@x.com", "primary": True, "verified": True},
    ]
    responses = [_response(200, {"id": 1, "login": "octocat", "email": None}), _response(200, emails)]
    with patch("classroom_api.services.github_oauth.httpx.get", side_effect=responses):
        assert github.fetch_profile("tok")["email"] == "main@x.com"


def test_fetch_profile_email_scope_declined(github):
    responses = [
        _response(200, {"id": 1, "login": "octocat", "email": None}),
        _response(404, {"message": "Not Found"}, url="https://api.github.com/user/emails"),
    ]
    with patch("classroom_api.services.github_oauth.httpx.get", side_effect=responses):
        assert github.fetch_profile("tok")["email"] is None


def test_fetch_profile_unauthorized(github):
    response = _response(401, {"message": "Bad credentials"}, url="https://api.github.com/user")
    with patch("classroom_api.services.github_oauth.httpx.get", return_value=response):
        with pytest.raises(errors.GitHubAuthError):
            github.fetch_profile("tok")
