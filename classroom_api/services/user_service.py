"""
User Service - accounts created from GitHub logins.
"""

from typing import Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection

from classroom_api.core.log import get_logger
from classroom_api.db.mongodb import get_collection, COLLECTIONS
from classroom_api.models.base import utcnow
from classroom_api.services.mongo_service import is_object_id, parse_object_id, serialize_doc, translate_errors

logger = get_logger(__name__)


class UserService:
    """
    Handles user accounts. One document per GitHub account (unique githubId).
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def upsert_github_user(self, profile: dict) -> dict:
        """
        Create or refresh the user for a GitHub profile.

        Args:
            profile: GitHub /user payload (id, login, name, email)

        Returns:
            The stored user
        """
        now = utcnow()
        github_id = str(profile["id"])
        with translate_errors(("githubId",)):
            doc = self.collection.find_one_and_update(
                {"githubId": github_id},
                {
                    "$set": {
                        "username": profile["login"],
                        "displayName": profile.get("name"),
                        "email": profile.get("email"),
                        "updatedAt": now,
                    },
                    "$setOnInsert": {"githubId": github_id, "createdAt": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        logger.info("user_logged_in", user_id=str(doc["_id"]), username=doc["username"])
        return serialize_doc(doc)

    def get_by_id(self, user_id: str) -> Optional[dict]:
        """Fetch a user; None for unknown or malformed ids."""
        if not is_object_id(user_id):
            return None
        with translate_errors():
            doc = self.collection.find_one({"_id": parse_object_id(user_id, "User")})
        return serialize_doc(doc)
