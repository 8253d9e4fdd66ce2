"""Check run reporting."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from hosting_deploy.github.client import GitHubClient
from hosting_deploy.github.context import GitHubContext
from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)

CHECK_NAME = "Deploy Preview"

FinishCheck = Callable[[dict[str, Any]], Awaitable[None]]


async def log_details(details: dict[str, Any]) -> None:
    """Fallback finisher when no check run could be opened."""
    logger.info("check.finished", **details)


async def create_check(client: GitHubClient, context: GitHubContext) -> FinishCheck:
    """Open an in-progress check run and return a coroutine that completes it."""
    check = await client.create_check_run(
        context.owner,
        context.repo,
        name=CHECK_NAME,
        head_sha=context.head_sha,
        status="in_progress",
    )
    check_run_id = check["id"]
    logger.info("check.created", check_run_id=check_run_id, head_sha=context.head_sha)

    async def finish(details: dict[str, Any]) -> None:
        await client.update_check_run(
            context.owner,
            context.repo,
            check_run_id,
            status="completed",
            completed_at=datetime.now(timezone.utc).isoformat(),
            **details,
        )
        logger.info(
            "check.completed",
            check_run_id=check_run_id,
            conclusion=details.get("conclusion"),
        )

    return finish
