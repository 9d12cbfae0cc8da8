"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "classroom"

    # GitHub OAuth app (https://github.com/settings/developers)
    github_client_id: str = ""
    github_client_secret: str = ""
    github_callback_url: str = "http://localhost:8000/auth/github/callback"
    github_authorize_url: str = "https://github.com/login/oauth/authorize"
    github_token_url: str = "https://github.com/login/oauth/access_token"
    github_api_url: str = "https://api.github.com"

    # Session token (signed JWT stored in a cookie)
    session_secret_key: str = "change-this-secret"
    session_algorithm: str = "HS256"
    session_expire_minutes: int = 1440
    session_cookie_name: str = "classroom_session"
    session_cookie_secure: bool = False

    # Require a logged-in user for create/update/delete
    auth_enabled: bool = True

    # App
    log_level: str = "INFO"
    debug: bool = True

    @property
    def github_configured(self) -> bool:
        """True when the OAuth app credentials are present"""
        return bool(self.github_client_id and self.github_client_secret)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
