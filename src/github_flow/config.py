"""Process configuration for github-flow.

Settings are read once at startup by the CLI layer and handed to the
GitHub client constructor.  Nothing else reads the environment.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_flow.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Environment-backed configuration.

    Values come from the process environment first, then from a ``.env``
    file in the working directory.  A missing token is not an error here;
    GitHub rejects the unauthenticated calls and that failure surfaces as
    a remote error.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    github_token: SecretStr | None = Field(
        default=None,
        description="Personal access token sent as a Bearer credential.",
    )
    github_username: str | None = Field(
        default=None,
        description="Account identifier used when no username is given.",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL of the GitHub REST API.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="GITHUB_FLOW_HTTP_TIMEOUT",
        description="Transport timeout per request (seconds).",
    )


def load_settings() -> Settings:
    """Build :class:`Settings`, mapping pydantic failures to our hierarchy."""
    try:
        return Settings()
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {exc.error_count()} error(s)",
            hint=str(exc),
        ) from exc
