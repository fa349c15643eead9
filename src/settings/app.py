"""Storage client settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.fetch.config import FetchConfig
from src.fetch.constants import DEFAULT_USER_AGENT
from src.observability.logging import configure_logging, level_from_name


class FetchSettings(BaseSettings):
    """Centralized environment configuration for the fetch layer."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_FETCH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout_seconds: float | None = Field(default=None, ge=1.0, le=300.0)
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    log_json: bool = True

    def to_fetch_config(
        self, default_headers: dict[str, str] | None = None
    ) -> FetchConfig:
        """Build a FetchConfig from these settings.

        Credentials are not read from the environment here; pass them as
        ``default_headers``.
        """
        return FetchConfig(
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
            default_headers=dict(default_headers or {}),
        )

    def apply_logging(self) -> None:
        """Configure structured logging from log_level and log_json."""
        configure_logging(
            level=level_from_name(self.log_level), json_format=self.log_json
        )


def get_settings() -> FetchSettings:
    """Get a settings instance."""
    return FetchSettings()
