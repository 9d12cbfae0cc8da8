"""
Teacher Service - CRUD operations for the teachers collection.

Every write goes through validate_teacher() first; uniqueness of email and
employeeId is left to the unique indexes and surfaces as DuplicateKeyError.
"""

from typing import Dict, Iterable, List

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from classroom_api.core import errors
from classroom_api.core.log import get_logger
from classroom_api.db.mongodb import get_collection, COLLECTIONS
from classroom_api.models import ValidationMode, validate_teacher
from classroom_api.models.base import utcnow
from classroom_api.services.mongo_service import (
    is_object_id, parse_object_id, serialize_doc, serialize_docs, translate_errors
)

logger = get_logger(__name__)


class TeacherService:
    """
    Handles teacher records.
    """

    ENTITY = "Teacher"
    UNIQUE_FIELDS = ("email", "employeeId")

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["teachers"])

    def create(self, payload) -> dict:
        """
        Validate and insert a new teacher.

        Args:
            payload: Request body (camelCase keys)

        Returns:
            The stored teacher with its generated `id` and timestamps

        Raises:
            ValidationError, DuplicateKeyError
        """
        record = validate_teacher(payload, ValidationMode.create)
        now = utcnow()
        record["createdAt"] = now
        record["updatedAt"] = now

        with translate_errors(self.UNIQUE_FIELDS):
            result = self.collection.insert_one(record)
            stored = self.collection.find_one({"_id": result.inserted_id})

        logger.info("teacher_created", teacher_id=str(result.inserted_id))
        return serialize_doc(stored or record)

    def get(self, teacher_id: str) -> dict:
        """Fetch one teacher. Raises MalformedIdError / NotFoundError."""
        oid = parse_object_id(teacher_id, self.ENTITY)
        with translate_errors():
            doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)
        return serialize_doc(doc)

    def list_all(self) -> List[dict]:
        """Every teacher, unpaginated."""
        with translate_errors():
            docs = list(self.collection.find({}))
        return serialize_docs(docs)

    def update(self, teacher_id: str, payload) -> dict:
        """
        Apply a partial update. Only the supplied fields change.

        Raises:
            MalformedIdError, EmptyUpdateError, ValidationError,
            DuplicateKeyError, NotFoundError
        """
        oid = parse_object_id(teacher_id, self.ENTITY)
        if not payload:
            raise errors.EmptyUpdateError()
        changes = validate_teacher(payload, ValidationMode.update)
        if not changes:
            raise errors.EmptyUpdateError()
        changes["updatedAt"] = utcnow()

        with translate_errors(self.UNIQUE_FIELDS):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)

        logger.info("teacher_updated", teacher_id=teacher_id, fields=sorted(changes))
        return serialize_doc(doc)

    def delete(self, teacher_id: str) -> dict:
        """
        Remove a teacher and return the record as it was before deletion.
        Students referencing it are left untouched.
        """
        oid = parse_object_id(teacher_id, self.ENTITY)
        with translate_errors():
            doc = self.collection.find_one_and_delete({"_id": oid})
        if doc is None:
            raise errors.NotFoundError(self.ENTITY)

        logger.info("teacher_deleted", teacher_id=teacher_id)
        return serialize_doc(doc)

    def exists(self, teacher_id) -> bool:
        """True if a teacher with this id is stored right now."""
        if not is_object_id(teacher_id):
            return False
        with translate_errors():
            doc = self.collection.find_one({"_id": ObjectId(teacher_id)}, {"_id": 1})
        return doc is not None

    def get_summaries(self, teacher_ids: Iterable[ObjectId]) -> Dict[ObjectId, dict]:
        """Fetch name/email for many teachers in one query, keyed by ObjectId."""
        ids = list(teacher_ids)
        if not ids:
            return {}
        with translate_errors():
            cursor = self.collection.find({"_id": {"$in": ids}}, {"name": 1, "email": 1})
            return {doc["_id"]: doc for doc in cursor}

