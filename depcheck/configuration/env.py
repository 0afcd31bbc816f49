"""Pydantic Settings model for environment-sourced configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from depcheck.utils.constants import DEFAULT_GITHUB_API_URL


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    DEBUG: bool = False

    # Set by GitHub Actions to the 'owner/name' of the repository running the workflow.
    GITHUB_REPOSITORY: str | None = None
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
