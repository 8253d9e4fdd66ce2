"""Preview channel naming."""

import re

from hosting_deploy.github.context import GitHubContext
from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)

# Channel IDs may only contain letters, numbers, underscores, hyphens and periods
INVALID_CHANNEL_CHARACTERS = re.compile(r"[^a-zA-Z0-9_\-.]")
BRANCH_PREFIX_LENGTH = 20


def get_channel_id(configured_channel_id: str, context: GitHubContext) -> str:
    """Use the configured channel, else ``pr<number>-<branch>`` for pull requests."""
    channel_id = ""
    if configured_channel_id:
        channel_id = configured_channel_id
    elif context.pull_request:
        branch_name = context.head_ref[:BRANCH_PREFIX_LENGTH]
        channel_id = f"pr{context.pull_request.get('number')}-{branch_name}"

    corrected = INVALID_CHANNEL_CHARACTERS.sub("_", channel_id)
    if corrected != channel_id:
        logger.info(
            "channel.id_corrected",
            original=channel_id,
            corrected=corrected,
        )
    return corrected
