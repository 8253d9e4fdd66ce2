"""Deploy execution and result interpretation."""

from hosting_deploy.core.exceptions import (
    ConfigurationError,
    DeploymentError,
    HostingDeployError,
    MalformedResultError,
    PreconditionError,
    ProcessFailure,
)
from hosting_deploy.core.executor import (
    DeployExecutor,
    build_preview_args,
    build_production_args,
    deploy_preview,
    deploy_production_site,
)
from hosting_deploy.core.interpreter import (
    interpret_channel_deploy_result,
    parse_deploy_result,
)
from hosting_deploy.core.invoker import CapturedOutput, ProcessInvoker

__all__ = [
    "HostingDeployError",
    "ConfigurationError",
    "DeploymentError",
    "MalformedResultError",
    "PreconditionError",
    "ProcessFailure",
    "CapturedOutput",
    "ProcessInvoker",
    "DeployExecutor",
    "build_preview_args",
    "build_production_args",
    "deploy_preview",
    "deploy_production_site",
    "interpret_channel_deploy_result",
    "parse_deploy_result",
]
