"""
MongoDB Service helpers shared by the entity services.

- ObjectId parsing (malformed ids become MalformedIdError)
- Document serialization (_id -> id, ObjectId references -> str)
- Translation of driver errors into the classroom error taxonomy
"""

from contextlib import contextmanager
from typing import Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError

from classroom_api.core import errors
from classroom_api.core.log import get_logger

logger = get_logger(__name__)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """
    Convert MongoDB document to JSON-serializable dict.
    The primary key is exposed as `id`; other ObjectId values become strings.
    """
    if doc is None:
        return None
    result = {}
    for key, value in doc.items():
        if key == "_id":
            result["id"] = str(value)
        elif isinstance(value, ObjectId):
            result[key] = str(value)
        else:
            result[key] = value
    return result


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def parse_object_id(value, entity: str = "Record") -> ObjectId:
    """Parse a client-supplied id; raises MalformedIdError if it is not an ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if not is_object_id(value):
        raise errors.MalformedIdError(entity)
    return ObjectId(value)


def is_object_id(value) -> bool:
    return isinstance(value, ObjectId) or (isinstance(value, str) and ObjectId.is_valid(value))


# ============================================================
# DRIVER ERROR TRANSLATION
# ============================================================

def duplicate_key_field(exc: MongoDuplicateKeyError, candidates=()) -> Optional[str]:
    """
    Work out which unique field an E11000 error is about.

    Newer servers report keyPattern / keyValue in the error details; older
    ones only name the index in the message (e.g. "index: email_1 dup key").
    """
    details = exc.details or {}
    for key in ("keyPattern", "keyValue"):
        fields = details.get(key)
        if fields:
            return next(iter(fields))
    message = str(exc)
    for field in candidates:
        if f"{field}_1" in message or f"'{field}'" in message:
            return field
    return None


@contextmanager
def translate_errors(unique_fields=()):
    """
    Wrap a database call so driver errors surface as classroom errors.

    Usage:
        with translate_errors(("email", "employeeId")):
            collection.insert_one(doc)
    """
    try:
        yield
    except MongoDuplicateKeyError as e:
        field = duplicate_key_field(e, unique_fields)
        value = (e.details or {}).get("keyValue", {}).get(field) if field else None
        raise errors.DuplicateKeyError(field, value) from e
    except PyMongoError as e:
        logger.error("mongodb_operation_failed", error=str(e))
        raise errors.PersistenceError() from e
