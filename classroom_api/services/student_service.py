"""
Student Service - CRUD operations for the students collection.

Each student references one teacher by ObjectId. Before any write that sets
`teacher`, the referenced teacher must exist (check_teacher_exists). The
check and the write are separate round-trips, so a teacher deleted in
between leaves a dangling reference; there is no transaction around them.

Reads join-expand `teacher` into {id, name, email} with a second query
(expand_teachers).
"""

from typing import List

from pymongo import ReturnDocument
from pymongo.collection import Collection

from classroom_api.core import errors
from classroom_api.core.log import get_logger
from classroom_api.db.mongodb import get_collection, COLLECTIONS
from classroom_api.models import ValidationMode, validate_student
from classroom_api.models.base import utcnow
from classroom_api.services.mongo_service import parse_object_id, serialize_doc, translate_errors
from classroom_api.services.teacher_service import TeacherService

logger = get_logger(__name__)


class StudentService:
    """
    Handles student records and their teacher reference.
    """

    ENTITY = "Student"
    UNIQUE_FIELDS = ("email",)

    def __init__(self, teachers: TeacherService = None):
        self.collection: Collection = get_collection(COLLECTIONS["students"])
        self.teachers = teachers or TeacherService()

    # ============================================================
    # REFERENCE INTEGRITY
    # ============================================================

    def check_teacher_exists(self, teacher_id) -> bool:
        """Plain existence check; callers decide what a missing teacher means."""
        return self.teachers.exists(teacher_id)

    def _require_teacher(self, teacher_id) -> None:
        if not self.check_teacher_exists(teacher_id):
            logger.warning("student_teacher_missing", teacher_id=str(teacher_id))
            raise errors.ReferenceNotFoundError("teacher", str(teacher_id))

    # ============================================================
    # JOIN-EXPAND
    # ============================================================

    def expand_teachers(self, docs: List[dict]) -> List[dict]:
        """
        Replace each raw `teacher` ObjectId with {id, name, email}.

        All referenced teachers are fetched in one query. A reference to a
        teacher that no longer exists keeps its id with name/email set to None.
        """
        refs = {doc["teacher"] for doc in docs if doc.get("teacher") is not None}
        summaries = self.teachers.get_summaries(refs)

        expanded = []
        for doc in docs:
            student = serialize_doc(doc)
            ref = doc.get("teacher")
            if ref is not None:
                teacher = summaries.get(ref, {})
                student["teacher"] = {
                    "id": str(ref),
                    "name": teacher.get("name"),
                    "email": teacher.get("email"),
                }
            expanded.append(student)
        return expanded

    def expand_teacher(self, doc: dict) -> dict:
        return self.expand_teachers([doc])[0]

    # ============================================================
    # CRUD
    # ============================================================

    def create(self, payload) -> dict:
        """
        Validate, check the teacher reference, then insert.

        Raises:
            ValidationError, ReferenceNotFoundError, DuplicateKeyError
        """
        record = validate_student(payload, ValidationMode.create)
        self._require_teacher(record["teacher"])

        now = utcnow()
        record["createdAt"] = now
        record["updatedAt"] = now

        with translate_errors(self.UNIQUE_FIELDS):
            result = self.collection.insert_one(record)
            stored = self.collection.find_one({"_id": result.inserted_id})

        logger.info("student_created", student_id=str(result.inserted_id),
                    teacher_id=str(record["teacher"]))
        return self.expand_teacher(stored or record)

    def get(self, student_id: str) -> dict:
        oid = parse_object_id(student_id, self.ENTITY)
        with translate_errors():
            doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)
        return self.expand_teacher(doc)

    def list_all(self) -> List[dict]:
        """Every student, join-expanded, unpaginated."""
        with translate_errors():
            docs = list(self.collection.find({}))
        return self.expand_teachers(docs)

    def update(self, student_id: str, payload) -> dict:
        """
        Apply a partial update. The teacher reference is re-checked only when
        `teacher` is among the supplied fields.
        """
        oid = parse_object_id(student_id, self.ENTITY)
        if not payload:
            raise errors.EmptyUpdateError()
        changes = validate_student(payload, ValidationMode.update)
        if not changes:
            raise errors.EmptyUpdateError()
        if "teacher" in changes:
            self._require_teacher(changes["teacher"])
        changes["updatedAt"] = utcnow()

        with translate_errors(self.UNIQUE_FIELDS):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)

        logger.info("student_updated", student_id=student_id, fields=sorted(changes))
        return self.expand_teacher(doc)

    def delete(self, student_id: str) -> dict:
        """Remove a student; returns the pre-deletion snapshot, join-expanded."""
        oid = parse_object_id(student_id, self.ENTITY)
        with translate_errors():
            doc = self.collection.find_one_and_delete({"_id": oid})
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)

        logger.info("student_deleted", student_id=student_id)
        return self.expand_teacher(doc)
