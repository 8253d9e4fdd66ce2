"""Deployment data models."""

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hosting_deploy.config import LATEST_TOOL_VERSION


class DeployMode(str, Enum):
    """Which firebase-tools deploy verb produced a result."""

    CHANNEL = "channel"
    PRODUCTION = "production"


class DeployConfig(BaseModel):
    """Options shared by preview and production deploys."""

    model_config = ConfigDict(frozen=True)

    project_id: str = ""
    # Firebase targets passed via --only
    targets: tuple[str, ...] | None = None
    # firebase.json path, relative to the entry point
    config: str | None = None
    tool_version: str = LATEST_TOOL_VERSION

    @field_validator("targets")
    @classmethod
    def _targets_not_blank(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is not None and any(not target for target in value):
            raise ValueError("targets must be non-empty strings")
        return value

    @field_validator("tool_version", mode="before")
    @classmethod
    def _latest_when_blank(cls, value: str | None) -> str:
        return value or LATEST_TOOL_VERSION


class ChannelDeployConfig(DeployConfig):
    """Deploy to a preview channel."""

    channel_id: str = Field(..., min_length=1)
    expires: str = ""


class ProductionDeployConfig(DeployConfig):
    """Deploy to the live site."""

    pass


class AuthContext(BaseModel):
    """Credentials handed to firebase-tools."""

    model_config = ConfigDict(frozen=True)

    # Path to a Google Application Credentials JSON file
    credential_file_ref: str | None = None
    token: str | None = None


class SiteDeploy(BaseModel):
    """One hosting site deployed to a channel."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    site: str
    target: str | None = None
    url: str
    expire_time: str = Field(..., alias="expireTime")


class ChannelSuccessResult(BaseModel):
    """Successful ``hosting:channel:deploy`` output, keyed by site."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    result: dict[str, SiteDeploy]


class ProductionSuccessResult(BaseModel):
    """Successful ``deploy`` output.

    Keys vary by deployed resource and values are resource-specific, so they
    are left uninterpreted here.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    result: dict[str, Any] = Field(default_factory=dict)


class ErrorResult(BaseModel):
    """firebase-tools ran but reported a failed deploy."""

    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    error: str


ChannelDeployResult = Union[ChannelSuccessResult, ErrorResult]
ProductionDeployResult = Union[ProductionSuccessResult, ErrorResult]
DeployResult = Union[ChannelSuccessResult, ProductionSuccessResult, ErrorResult]


class InterpretedChannelResult(BaseModel):
    """Display-ready fields derived from a channel deploy."""

    model_config = ConfigDict(frozen=True)

    expire_time: str
    expire_time_formatted: str
    urls: list[str]
