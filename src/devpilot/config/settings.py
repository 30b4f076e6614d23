"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "DEVPILOT_"}

    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key; keyword classification only when unset",
    )
    openai_model: str = Field(default="gpt-4o", description="OpenAI model name")
    log_level: str = Field(default="INFO", description="Logging level")
    default_project: str = Field(
        default="default-project",
        description="Project used when a command names none (never deployed to)",
    )
    request_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for any single collaborator call (0 disables)",
    )
    triggered_by: str = Field(
        default="devpilot",
        description="Value of the TRIGGERED_BY pipeline variable",
    )
