"""Action entry point: deploy, then report through outputs, checks and comments."""

import asyncio
import os
import sys
from pathlib import Path
from typing import Any

from hosting_deploy import __version__
from hosting_deploy.config import ActionInputs
from hosting_deploy.core.exceptions import ConfigurationError, DeploymentError
from hosting_deploy.core.executor import DeployExecutor
from hosting_deploy.core.interpreter import interpret_channel_deploy_result
from hosting_deploy.github.actions import group, set_failed, set_output
from hosting_deploy.github.channel import get_channel_id
from hosting_deploy.github.checks import FinishCheck, create_check, log_details
from hosting_deploy.github.client import GitHubClient
from hosting_deploy.github.comments import (
    get_urls_markdown,
    post_channel_success_comment,
    summarize_production_result,
)
from hosting_deploy.github.context import GitHubContext
from hosting_deploy.github.credentials import build_auth_context
from hosting_deploy.models.deployment import (
    AuthContext,
    ChannelDeployConfig,
    ErrorResult,
    ProductionDeployConfig,
)
from hosting_deploy.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def verify_config_exists(inputs: ActionInputs) -> None:
    """Move into the entry point and make sure the Firebase config is there."""
    if inputs.entry_point != ".":
        logger.info("action.changing_directory", entry_point=inputs.entry_point)
        try:
            os.chdir(inputs.entry_point)
        except OSError as e:
            raise ConfigurationError(
                f"Error changing to directory {inputs.entry_point}: {e}",
                {"entry_point": inputs.entry_point},
            ) from e

    if not Path(inputs.config).exists():
        raise ConfigurationError(
            f"{inputs.config} file not found. If your config file is not in the root "
            "of your repo, edit the entryPoint option or set the config option of this "
            "GitHub action.",
            {"config": inputs.config},
        )
    logger.info("action.config_found", config=inputs.config)


def setup_credentials(inputs: ActionInputs) -> AuthContext:
    if not inputs.firebase_service_account and not inputs.firebase_token:
        raise ConfigurationError(
            "No credentials provided: set firebaseServiceAccount or firebaseToken"
        )
    auth = build_auth_context(inputs.firebase_service_account, inputs.firebase_token)
    if auth.credential_file_ref:
        logger.info("action.credentials_created", reason="Application Default Credentials")
    return auth


async def deploy_production(
    inputs: ActionInputs,
    auth: AuthContext,
    executor: DeployExecutor,
    finish: FinishCheck,
) -> None:
    with group("Deploying to production site"):
        deployment = await executor.deploy_production_site(
            auth,
            ProductionDeployConfig(
                project_id=inputs.project_id,
                targets=inputs.target_list,
                config=inputs.config,
                tool_version=inputs.firebase_tools_version,
            ),
        )
    if isinstance(deployment, ErrorResult):
        raise DeploymentError(deployment.error)

    hostname = f"{inputs.project_id}.web.app"
    url = f"https://{hostname}/"
    resources = summarize_production_result(deployment.result) or ["hosting"]
    summary = "\n".join(
        ["Deployed resources:", *resources, f"Primary URL: [{hostname}]({url})"]
    )

    await finish(
        {
            "details_url": url,
            "conclusion": "success",
            "output": {"title": "Production deploy succeeded", "summary": summary},
        }
    )


async def deploy_channel(
    inputs: ActionInputs,
    context: GitHubContext,
    auth: AuthContext,
    executor: DeployExecutor,
    client: GitHubClient | None,
    finish: FinishCheck,
) -> None:
    channel_id = get_channel_id(inputs.channel_id, context)
    if not channel_id:
        raise ConfigurationError(
            "No preview channel to deploy to: set the channelId input or run this "
            "action on a pull_request event",
            {"event": context.event_name},
        )

    with group(f"Deploying to Firebase preview channel {channel_id}"):
        deployment = await executor.deploy_preview(
            auth,
            ChannelDeployConfig(
                project_id=inputs.project_id,
                expires=inputs.expires,
                channel_id=channel_id,
                targets=inputs.target_list,
                config=inputs.config,
                tool_version=inputs.firebase_tools_version,
            ),
        )
    if isinstance(deployment, ErrorResult):
        raise DeploymentError(deployment.error)

    interpreted = interpret_channel_deploy_result(deployment)
    set_output("urls", interpreted.urls)
    set_output("expire_time", interpreted.expire_time)
    set_output("expire_time_formatted", interpreted.expire_time_formatted)
    set_output("details_url", interpreted.urls[0])

    if inputs.comments_disabled:
        logger.info("action.comment_disabled", disable_comment=inputs.disable_comment)
    elif client is not None and context.is_pull_request:
        commit = context.head_sha[:7]
        await post_channel_success_comment(client, context, deployment, commit)

    await finish(
        {
            "details_url": interpreted.urls[0],
            "conclusion": "success",
            "output": {
                "title": "Deploy preview succeeded",
                "summary": get_urls_markdown(deployment),
            },
        }
    )


async def run(
    inputs: ActionInputs,
    context: GitHubContext,
    executor: DeployExecutor | None = None,
    client: GitHubClient | None = None,
) -> int:
    """Run one deploy. Returns the process exit code."""
    executor = executor or DeployExecutor()
    if client is None and inputs.github_token:
        client = GitHubClient(inputs.github_token)

    logger.info(
        "action.starting",
        version=__version__,
        production=inputs.is_production_deploy,
        pull_request=context.is_pull_request,
    )

    finish: FinishCheck = log_details
    try:
        if client is not None and context.is_pull_request:
            finish = await create_check(client, context)

        with group("Verifying firebase.json exists"):
            verify_config_exists(inputs)

        with group("Setting up CLI credentials"):
            auth = setup_credentials(inputs)

        if inputs.is_production_deploy:
            await deploy_production(inputs, auth, executor, finish)
        else:
            await deploy_channel(inputs, context, auth, executor, client, finish)
        return 0
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.error("action.failed", error=message, error_type=type(e).__name__)
        set_failed(message)
        failure: dict[str, Any] = {
            "conclusion": "failure",
            "output": {"title": "Deploy preview failed", "summary": f"Error: {message}"},
        }
        await finish(failure)
        return 1
    finally:
        if client is not None:
            await client.aclose()


def main() -> None:
    configure_logging()
    exit_code = asyncio.run(run(ActionInputs(), GitHubContext.from_env()))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
