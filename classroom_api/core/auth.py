"""
Authentication Utility - session tokens and the identity gate.

Provides:
- Session token creation/verification (JWT, signed with the app secret)
- authenticate(): resolve the caller from the session cookie or a Bearer header
- FastAPI dependencies for protected routes
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from classroom_api.core import errors
from classroom_api.core.config import get_settings
from classroom_api.services.user_service import UserService

settings = get_settings()

# Bearer token extractor; the cookie is the primary carrier, so a missing
# header is not an error here
bearer_scheme = HTTPBearer(auto_error=False)


def create_session_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create the signed session token for a logged-in user."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.session_expire_minutes))
    to_encode = {"sub": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.session_secret_key, algorithm=settings.session_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify a session token. None if invalid or expired."""
    try:
        return jwt.decode(token, settings.session_secret_key, algorithms=[settings.session_algorithm])
    except JWTError:
        return None


def authenticate(request: Request, credentials: Optional[HTTPAuthorizationCredentials] = None) -> Optional[dict]:
    """
    Resolve the caller's identity.

    Returns:
        The stored user dict, or None when no valid session is present.
        Never raises for missing or bad credentials.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        return None

    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None

    return UserService().get_by_id(payload["sub"])


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    user = authenticate(request, credentials)
    if user is None:
        raise errors.UnauthenticatedError()
    return user


async def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[dict]:
    """
    Dependency for create/update/delete routes.
    A pass-through when AUTH_ENABLED is false.
    """
    if not settings.auth_enabled:
        return None
    return await get_current_user(request, credentials)
