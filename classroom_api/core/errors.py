"""
Error taxonomy for the classroom API.

Services raise these; the HTTP layer renders them with one exception handler
(see main.py). Each class carries the status code it maps to.
"""

from typing import Dict, Optional


class ClassroomError(Exception):
    """Base class for every error the API reports to the client."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ClassroomError):
    """Client-supplied data violates the entity schema."""

    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: Optional[Dict[str, str]] = None, message: Optional[str] = None):
        self.errors = errors or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class EmptyUpdateError(ValidationError):
    message = "No fields provided for update."


class ReferenceNotFoundError(ClassroomError):
    """A referenced entity does not exist."""

    status_code = 400

    def __init__(self, field: str, value: str, entity: str = "Teacher"):
        self.field = field
        self.value = value
        super().__init__(f"{entity} not found for {field} '{value}'")

    def to_dict(self) -> dict:
        return {"message": self.message, "field": self.field}


class DuplicateKeyError(ClassroomError):
    """A unique constraint (email, employeeId, githubId) was violated."""

    status_code = 400

    def __init__(self, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value
        if field:
            message = f"A record with this {field} already exists"
        else:
            message = "A record with these values already exists"
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class MalformedIdError(ClassroomError):
    """Identifier is not a valid ObjectId."""

    status_code = 400

    def __init__(self, entity: str = "Record"):
        super().__init__(f"Invalid {entity} ID")


class NotFoundError(ClassroomError):
    status_code = 404

    def __init__(self, entity: str = "Record"):
        super().__init__(f"{entity} not found")


class PersistenceError(ClassroomError):
    """Unclassified database failure."""

    status_code = 500
    message = "Server error accessing the database"


class UnauthenticatedError(ClassroomError):
    status_code = 401
    message = "Unauthorized: You must be logged in to access this resource."


class OAuthStateError(ClassroomError):
    """OAuth callback without a matching state value (possible CSRF)."""

    status_code = 400
    message = "Invalid OAuth state"


class GitHubAuthError(ClassroomError):
    """GitHub rejected the code exchange or profile request."""

    status_code = 502
    message = "GitHub authentication failed"


class AuthNotConfiguredError(ClassroomError):
    status_code = 503
    message = "GitHub OAuth is not configured"
