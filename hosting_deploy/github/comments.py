"""Pull request comments and human-readable deploy summaries."""

from typing import Any

import httpx

from hosting_deploy.core.interpreter import interpret_channel_deploy_result
from hosting_deploy.github.actions import group
from hosting_deploy.github.client import GitHubClient
from hosting_deploy.github.context import GitHubContext
from hosting_deploy.models.deployment import ChannelSuccessResult
from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)

BOT_SIGNATURE = (
    "<sub>🔥 via [Firebase Hosting GitHub Action]"
    "(https://github.com/marketplace/actions/deploy-to-firebase-hosting) 🌎</sub>"
)


def is_comment_by_bot(comment: dict[str, Any]) -> bool:
    """True for comments this action posted earlier."""
    user = comment.get("user") or {}
    return user.get("type") == "Bot" and BOT_SIGNATURE in (comment.get("body") or "")


def get_urls_markdown(result: ChannelSuccessResult) -> str:
    """A single link, or a bullet list when several sites were deployed."""
    urls = interpret_channel_deploy_result(result).urls
    if len(urls) == 1:
        return f"[{urls[0]}]({urls[0]})"
    return "\n".join(f"- [{url}]({url})" for url in urls)


def get_channel_deploy_success_comment(result: ChannelSuccessResult, commit: str) -> str:
    interpreted = interpret_channel_deploy_result(result)
    return "\n".join(
        [
            f"Visit the preview URL for this PR (updated for commit {commit}):",
            "",
            get_urls_markdown(result),
            "",
            f"<sub>(expires {interpreted.expire_time_formatted})</sub>",
            "",
            BOT_SIGNATURE,
        ]
    )


def summarize_production_result(result: dict[str, Any]) -> list[str]:
    """One line per deployed resource.

    Values are resource-specific: lists are counted, strings shown as is and
    mappings only reported as updated.
    """
    lines: list[str] = []
    for key, value in result.items():
        if isinstance(value, list):
            lines.append(f"{key}: {len(value)} item(s)")
        elif isinstance(value, str):
            lines.append(f"{key}: {value}")
        elif isinstance(value, dict):
            lines.append(f"{key}: updated")
        else:
            lines.append(key)
    return lines


async def post_channel_success_comment(
    client: GitHubClient,
    context: GitHubContext,
    result: ChannelSuccessResult,
    commit: str,
) -> None:
    """Update this action's last PR comment, or post a new one.

    Comment failures are logged and never fail the deploy.
    """
    issue_number = context.issue_number
    if issue_number is None:
        logger.warning("comment.no_issue_number")
        return

    body = get_channel_deploy_success_comment(result, commit)

    with group("Commenting on PR"):
        comment_id: int | None = None
        try:
            comments = await client.list_issue_comments(
                context.owner, context.repo, issue_number
            )
            for comment in reversed(comments):
                if is_comment_by_bot(comment):
                    comment_id = comment["id"]
                    break
        except httpx.HTTPError as e:
            logger.warning("comment.list_failed", error=str(e))

        if comment_id is not None:
            try:
                await client.update_issue_comment(context.owner, context.repo, comment_id, body)
                logger.info("comment.updated", comment_id=comment_id)
                return
            except httpx.HTTPError as e:
                logger.warning("comment.update_failed", comment_id=comment_id, error=str(e))

        try:
            created = await client.create_issue_comment(
                context.owner, context.repo, issue_number, body
            )
            logger.info("comment.created", comment_id=created.get("id"))
        except httpx.HTTPError as e:
            logger.warning("comment.create_failed", error=str(e))
