"""Data models for the hosting deploy action."""

from hosting_deploy.models.deployment import (
    AuthContext,
    ChannelDeployConfig,
    ChannelDeployResult,
    ChannelSuccessResult,
    DeployConfig,
    DeployMode,
    DeployResult,
    ErrorResult,
    InterpretedChannelResult,
    ProductionDeployConfig,
    ProductionDeployResult,
    ProductionSuccessResult,
    SiteDeploy,
)

__all__ = [
    # Configs
    "DeployConfig",
    "ChannelDeployConfig",
    "ProductionDeployConfig",
    "AuthContext",
    # Results
    "DeployMode",
    "DeployResult",
    "ChannelDeployResult",
    "ProductionDeployResult",
    "ChannelSuccessResult",
    "ProductionSuccessResult",
    "ErrorResult",
    "SiteDeploy",
    "InterpretedChannelResult",
]
