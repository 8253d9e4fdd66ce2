"""Deploy Executor.

Builds firebase-tools command lines for preview channel and production
deploys, runs them with the caller's credentials and parses the result.
"""

import shlex
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from hosting_deploy.config import LATEST_TOOL_VERSION, Settings, get_settings
from hosting_deploy.core.exceptions import ProcessFailure
from hosting_deploy.core.interpreter import parse_deploy_result
from hosting_deploy.core.invoker import Invoker, ProcessInvoker
from hosting_deploy.models.deployment import (
    AuthContext,
    ChannelDeployConfig,
    ChannelDeployResult,
    DeployConfig,
    DeployMode,
    ProductionDeployConfig,
    ProductionDeployResult,
)
from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)

# The first attempt plus a single --debug retry
MAX_ATTEMPTS = 2

CHANNEL_DEPLOY_VERB = "hosting:channel:deploy"
PRODUCTION_DEPLOY_VERB = "deploy"


def _scope_args(config: DeployConfig) -> list[str]:
    args: list[str] = []
    if config.config:
        args.extend(["--config", config.config])
    if config.targets:
        args.extend(["--only", ",".join(config.targets)])
    return args


def build_preview_args(config: ChannelDeployConfig) -> list[str]:
    """Base arguments for a preview channel deploy."""
    args = [CHANNEL_DEPLOY_VERB, config.channel_id, *_scope_args(config)]
    if config.expires:
        args.extend(["--expires", config.expires])
    return args


def build_production_args(config: ProductionDeployConfig) -> list[str]:
    """Base arguments for a production deploy."""
    return [PRODUCTION_DEPLOY_VERB, *_scope_args(config)]


class DeployExecutor:
    """Runs firebase-tools with credentials and a one-shot debug retry."""

    def __init__(
        self,
        invoker: Invoker | None = None,
        settings: Settings | None = None,
    ):
        self.invoker = invoker or ProcessInvoker()
        self.settings = settings or get_settings()

    def command(self, tool_version: str = LATEST_TOOL_VERSION) -> list[str]:
        """``npx firebase-tools@<version>`` split into argv form."""
        parts = shlex.split(self.settings.firebase_tools_command)
        parts[-1] = f"{parts[-1]}@{tool_version or LATEST_TOOL_VERSION}"
        return parts

    def environment(self, auth: AuthContext) -> Mapping[str, str]:
        """Variables laid over the inherited environment for the child."""
        env = {"FIREBASE_DEPLOY_AGENT": self.settings.deploy_agent}
        if auth.credential_file_ref:
            # firebase-tools authenticates from this automatically
            env["GOOGLE_APPLICATION_CREDENTIALS"] = auth.credential_file_ref
        return MappingProxyType(env)

    @staticmethod
    def compose_args(
        args: Sequence[str],
        project_id: str | None,
        auth: AuthContext,
        debug: bool = False,
    ) -> list[str]:
        composed = list(args)
        if project_id:
            composed.extend(["--project", project_id])
        if auth.token:
            composed.extend(["--token", auth.token])
        if debug:
            # More thorough error output; never passed otherwise so the
            # final line stays parseable JSON
            composed.append("--debug")
        return composed

    async def exec_with_credentials(
        self,
        args: Sequence[str],
        project_id: str | None,
        auth: AuthContext,
        *,
        debug: bool = False,
        tool_version: str = LATEST_TOOL_VERSION,
    ) -> str:
        """Run firebase-tools and return the last line it printed.

        A failure without ``debug`` is retried once with ``--debug`` so the
        log carries a more useful error. The retry's failure propagates.

        Raises:
            ProcessFailure: if the (final) attempt exits non-zero.
        """
        command = self.command(tool_version)
        env = self.environment(auth)
        attempt_debug = debug

        for attempt in range(1, MAX_ATTEMPTS + 1):
            command_args = self.compose_args(args, project_id, auth, debug=attempt_debug)
            logger.info(
                "deploy.invoking",
                attempt=attempt,
                command=self._display(command, command_args, auth),
            )

            try:
                output = await self.invoker.invoke(command, command_args, env)
            except ProcessFailure as e:
                if attempt_debug or attempt == MAX_ATTEMPTS:
                    logger.error(
                        "deploy.failed",
                        attempt=attempt,
                        error=e.message,
                        returncode=e.returncode,
                    )
                    raise
                logger.warning(
                    "deploy.retrying_with_debug",
                    reason="Retrying deploy with the --debug flag for better error output",
                    error=e.message,
                )
                attempt_debug = True
                continue

            return output.last_line

        # Unreachable: the final attempt either returns or raises
        raise AssertionError("deploy retry loop exited without a result")

    async def deploy_preview(
        self, auth: AuthContext, config: ChannelDeployConfig
    ) -> ChannelDeployResult:
        """Deploy to a preview channel and parse the per-site result."""
        text = await self.exec_with_credentials(
            build_preview_args(config),
            config.project_id,
            auth,
            tool_version=config.tool_version,
        )
        return parse_deploy_result(text, DeployMode.CHANNEL)

    async def deploy_production_site(
        self, auth: AuthContext, config: ProductionDeployConfig
    ) -> ProductionDeployResult:
        """Deploy to the live site and parse the per-resource result."""
        text = await self.exec_with_credentials(
            build_production_args(config),
            config.project_id,
            auth,
            tool_version=config.tool_version,
        )
        return parse_deploy_result(text, DeployMode.PRODUCTION)

    @staticmethod
    def _display(command: Sequence[str], args: Sequence[str], auth: AuthContext) -> str:
        line = " ".join([*command, *args])
        if auth.token:
            line = line.replace(auth.token, "***")
        return line


async def deploy_preview(
    auth: AuthContext,
    config: ChannelDeployConfig,
    executor: DeployExecutor | None = None,
) -> ChannelDeployResult:
    """Deploy to a preview channel with the default executor."""
    return await (executor or DeployExecutor()).deploy_preview(auth, config)


async def deploy_production_site(
    auth: AuthContext,
    config: ProductionDeployConfig,
    executor: DeployExecutor | None = None,
) -> ProductionDeployResult:
    """Deploy to the live site with the default executor."""
    return await (executor or DeployExecutor()).deploy_production_site(auth, config)
