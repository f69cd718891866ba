"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal, NamedTuple

from pydantic import PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OAuthCredentials(NamedTuple):
    """Client credentials for an external OAuth2 provider."""

    client_id: str
    client_secret: str
    callback_url: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_secret_key: str

    @field_validator("app_secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Ensure secret key is strong enough."""
        if len(v) < 32:
            raise ValueError("APP_SECRET_KEY must be at least 32 characters long")
        if v == "change-me-to-a-secure-random-string":
            raise ValueError("APP_SECRET_KEY must be changed from the default value")
        return v

    app_url: str = "http://localhost:8000"
    app_name: str = "Identity Link"

    # Database
    database_url: PostgresDsn
    db_pool_size: int = 5
    db_max_overflow: int = 5

    # Bearer tokens
    jwt_access_secret: str
    jwt_access_expires_in: str = "1d"
    jwt_refresh_secret: str
    jwt_refresh_expires_in: str = "7d"

    # GitHub OAuth (provider stays disabled until all three are set)
    github_client_id: str = ""
    github_client_secret: str = ""
    github_callback_url: str = "http://localhost:8000/api/v1/oauth/github/callback"

    oauth_failure_redirect: str = "/api/v1/oauth/login-failed"
    oauth_session: bool = True

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (postgresql+asyncpg)."""
        url = str(self.database_url)
        return url.replace("postgresql://", "postgresql+asyncpg://")

    @property
    def github_oauth(self) -> OAuthCredentials | None:
        """GitHub credentials, or None when any of them is missing."""
        credentials = OAuthCredentials(
            client_id=self.github_client_id.strip(),
            client_secret=self.github_client_secret.strip(),
            callback_url=self.github_callback_url.strip(),
        )
        if not all(credentials):
            return None
        return credentials


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
