"""Application configuration using pydantic-settings."""

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Django Core
    secret_key: str = Field(
        default="django-insecure-change-me-in-production",
        description="Django secret key for cryptographic signing",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (never use True in production)",
    )
    allowed_hosts_str: str = Field(
        default="localhost,127.0.0.1,testserver",
        alias="ALLOWED_HOSTS",
        description="Comma-separated list of allowed host/domain names",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def allowed_hosts(self) -> list[str]:
        """Get allowed hosts as a list.

        Returns:
            List of allowed host strings.

        """
        return [h.strip() for h in self.allowed_hosts_str.split(",") if h.strip()]

    # Database
    database_path: str = Field(
        default="db.sqlite3",
        description="Path to the SQLite database file",
    )

    # Pages
    pages_per_page: int = Field(
        default=10,
        ge=1,
        description="Default number of pages listed per index page",
    )
    slug_separator: str = Field(
        default="-",
        min_length=1,
        description="Separator between a page url and its uniqueness counter",
    )

    # Logfire (optional)
    logfire_token: str | None = Field(
        default=None,
        description="Logfire API token for observability",
    )
    logfire_environment: str = Field(
        default="development",
        description="Logfire environment name (e.g., development, staging, production)",
    )


settings = Settings()
