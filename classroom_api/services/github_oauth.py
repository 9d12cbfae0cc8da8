"""
GitHub OAuth Client

Implements the three HTTP calls of GitHub's web application flow:
1. Build the authorize URL the browser is redirected to
2. Exchange the callback `code` for an access token
3. Fetch the user's profile (and primary email when it is private)

See https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps
"""
from typing import Optional
from urllib.parse import urlencode

import httpx

from classroom_api.core import errors
from classroom_api.core.config import Settings, get_settings
from classroom_api.core.log import get_logger

logger = get_logger(__name__)

SCOPE = "user:email"


class GitHubOAuthClient:
    """
    Thin wrapper over GitHub's OAuth endpoints.
    """

    def __init__(self, settings: Settings = None, timeout: float = 10.0):
        self.settings = settings or get_settings()
        self.timeout = timeout

    def authorize_url(self, state: str) -> str:
        """URL that starts the login; `state` comes back on the callback."""
        params = {
            "client_id": self.settings.github_client_id,
            "redirect_uri": self.settings.github_callback_url,
            "scope": SCOPE,
            "state": state,
        }
        return f"{self.settings.github_authorize_url}?{urlencode(params)}"

    def exchange_code(self, code: str) -> str:
        """Trade the callback code for an access token."""
        payload = {
            "client_id": self.settings.github_client_id,
            "client_secret": self.settings.github_client_secret,
            "code": code,
            "redirect_uri": self.settings.github_callback_url,
        }
        try:
            response = httpx.post(
                self.settings.github_token_url,
                data=payload,
                headers={"Accept": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("github_token_exchange_failed", error=str(e))
            raise errors.GitHubAuthError() from e

        # GitHub answers 200 with an "error" field for bad or expired codes
        token = result.get("access_token")
        if not token:
            logger.warning("github_token_missing", error=result.get("error"))
            raise errors.GitHubAuthError(result.get("error_description"))
        return token

    def fetch_profile(self, access_token: str) -> dict:
        """
        GitHub /user payload. If the public email is hidden, the primary
        verified address from /user/emails is filled in.
        """
        profile = self._get("/user", access_token)
        if not profile.get("email"):
            profile["email"] = self._primary_email(access_token)
        return profile

    def _primary_email(self, access_token: str) -> Optional[str]:
        try:
            emails = self._get("/user/emails", access_token)
        except errors.GitHubAuthError:
            # The scope may have been declined; the profile is usable without it
            return None
        for entry in emails:
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None

    def _get(self, path: str, access_token: str):
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }
        try:
            response = httpx.get(f"{self.settings.github_api_url}{path}", headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("github_api_request_failed", path=path, error=str(e))
            raise errors.GitHubAuthError() from e


def get_github_client() -> GitHubOAuthClient:
    """FastAPI dependency; overridden in tests."""
    return GitHubOAuthClient()
