"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file without clobbering variables set by the runner
load_dotenv()

LATEST_TOOL_VERSION = "latest"
LIVE_CHANNEL_ID = "live"


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # firebase-tools
    firebase_tools_command: str = "npx firebase-tools"
    deploy_agent: str = "action-hosting-deploy"

    # GitHub API
    github_api_url: str = "https://api.github.com"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Unset: JSON on GitHub Actions runners, console output elsewhere
    log_format: Literal["console", "json"] | None = None


class ActionInputs(BaseSettings):
    """Inputs passed to the action by the workflow (``INPUT_*`` variables)."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    firebase_service_account: str = Field(
        default="", validation_alias="INPUT_FIREBASESERVICEACCOUNT"
    )
    firebase_token: str = Field(default="", validation_alias="INPUT_FIREBASETOKEN")
    project_id: str = Field(default="", validation_alias="INPUT_PROJECTID")
    channel_id: str = Field(default="", validation_alias="INPUT_CHANNELID")
    expires: str = Field(default="", validation_alias="INPUT_EXPIRES")
    entry_point: str = Field(default=".", validation_alias="INPUT_ENTRYPOINT")
    config: str = Field(default="firebase.json", validation_alias="INPUT_CONFIG")
    targets: str = Field(default="", validation_alias="INPUT_TARGETS")
    firebase_tools_version: str = Field(
        default=LATEST_TOOL_VERSION, validation_alias="INPUT_FIREBASETOOLSVERSION"
    )
    disable_comment: str = Field(default="", validation_alias="INPUT_DISABLECOMMENT")
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_TOKEN", "INPUT_REPOTOKEN"),
    )

    @field_validator("entry_point", "config", "firebase_tools_version", mode="before")
    @classmethod
    def _default_when_blank(cls, value: str | None, info) -> str:
        if value is None or not str(value).strip():
            return cls.model_fields[info.field_name].default
        return str(value).strip()

    @property
    def target_list(self) -> list[str] | None:
        """Targets split on newlines and commas, blanks dropped."""
        parts = [part.strip() for part in self.targets.replace(",", "\n").split("\n")]
        parts = [part for part in parts if part]
        return parts or None

    @property
    def is_production_deploy(self) -> bool:
        return self.channel_id == LIVE_CHANNEL_ID

    @property
    def comments_disabled(self) -> bool:
        return self.disable_comment == "true"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
