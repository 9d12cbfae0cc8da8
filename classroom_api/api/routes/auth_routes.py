"""
Authentication Routes (GitHub OAuth)

GET /auth/github - Redirect to GitHub to log in
GET /auth/github/callback - GitHub redirects back here; starts the session
GET /auth/me - Get current user info
GET /auth/logout - End the session
"""

import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from classroom_api.core import errors
from classroom_api.core.auth import create_session_token, get_current_user, settings
from classroom_api.services.github_oauth import GitHubOAuthClient, get_github_client
from classroom_api.services.user_service import UserService
from classroom_api.schemas.schemas import UserResponse, MessageResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE = 600


@router.get("/github", status_code=302)
def github_login(github: GitHubOAuthClient = Depends(get_github_client)):
    """Start the GitHub login; the state value is kept in a short-lived cookie."""
    if not settings.github_configured:
        raise errors.AuthNotConfiguredError()

    state = secrets.token_urlsafe(16)
    response = RedirectResponse(github.authorize_url(state), status_code=302)
    response.set_cookie(
        STATE_COOKIE, state, max_age=STATE_MAX_AGE,
        httponly=True, samesite="lax", secure=settings.session_cookie_secure
    )
    return response


@router.get("/github/callback", status_code=302)
def github_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    github: GitHubOAuthClient = Depends(get_github_client)
):
    """
    Finish the GitHub login.

    Process:
    1. Check `state` against the cookie set by /auth/github
    2. Exchange `code` for an access token
    3. Fetch the GitHub profile and upsert the user
    4. Set the session cookie and redirect home
    """
    if error:
        raise errors.UnauthenticatedError(f"GitHub login was not completed: {error}")

    expected = request.cookies.get(STATE_COOKIE)
    if not code or not state or not expected or not secrets.compare_digest(state, expected):
        raise errors.OAuthStateError()

    access_token = github.exchange_code(code)
    profile = github.fetch_profile(access_token)
    user = UserService().upsert_github_user(profile)

    response = RedirectResponse("/", status_code=302)
    response.delete_cookie(STATE_COOKIE)
    response.set_cookie(
        settings.session_cookie_name, create_session_token(user["id"]),
        max_age=settings.session_expire_minutes * 60,
        httponly=True, samesite="lax", secure=settings.session_cookie_secure
    )
    return response


@router.get("/me", response_model=UserResponse)
def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return user


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out")
