"""Turn firebase-tools JSON output into typed deploy results."""

import json
import re
from datetime import datetime, timezone
from email.utils import format_datetime

from pydantic import BaseModel, ValidationError

from hosting_deploy.core.exceptions import MalformedResultError, PreconditionError
from hosting_deploy.models.deployment import (
    ChannelSuccessResult,
    DeployMode,
    DeployResult,
    ErrorResult,
    InterpretedChannelResult,
    ProductionSuccessResult,
)

RESULT_STATUSES = ("success", "error")

# Google timestamps carry anywhere from 1 to 9 fractional digits
FRACTIONAL_SECONDS = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")

SUCCESS_MODELS: dict[DeployMode, type[BaseModel]] = {
    DeployMode.CHANNEL: ChannelSuccessResult,
    DeployMode.PRODUCTION: ProductionSuccessResult,
}


def parse_deploy_result(raw_text: str, mode: DeployMode) -> DeployResult:
    """Parse the final line printed by firebase-tools.

    The document is decoded untyped first and its ``status`` checked before
    the variant for ``mode`` is built.

    Raises:
        MalformedResultError: if the text is not JSON, has no recognised
            ``status``, or does not match the shape for that status.
    """
    text = raw_text.strip()
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResultError(f"output is not valid JSON ({e.msg})", text) from e

    if not isinstance(document, dict):
        raise MalformedResultError("expected a JSON object", text)

    status = document.get("status")
    if status not in RESULT_STATUSES:
        raise MalformedResultError(f"unexpected status {status!r}", text)

    try:
        if status == "error":
            return ErrorResult.model_validate(document)
        return SUCCESS_MODELS[mode].model_validate(document)
    except ValidationError as e:
        raise MalformedResultError(
            f"{status} result does not match the {mode.value} shape: {e.error_count()} error(s)",
            text,
        ) from e


def format_rfc1123(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as e.g. ``Wed, 01 Jan 2020 00:00:00 GMT``."""
    try:
        normalized = FRACTIONAL_SECONDS.sub(
            lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}",
            timestamp.replace("Z", "+00:00"),
        )
        parsed = datetime.fromisoformat(normalized)
    except ValueError as e:
        raise MalformedResultError(f"invalid expire time {timestamp!r}", timestamp) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return format_datetime(parsed.astimezone(timezone.utc), usegmt=True)


def interpret_channel_deploy_result(
    deploy_result: ChannelSuccessResult,
) -> InterpretedChannelResult:
    """Derive expiry and URLs from a successful channel deploy.

    Only the first site's expire time is reported, even when sites
    disagree.
    """
    site_results = list(deploy_result.result.values())
    if not site_results:
        raise PreconditionError(
            "Channel deploy succeeded but reported no sites",
            {"result": deploy_result.model_dump()},
        )

    expire_time = site_results[0].expire_time
    return InterpretedChannelResult(
        expire_time=expire_time,
        expire_time_formatted=format_rfc1123(expire_time),
        urls=[site_result.url for site_result in site_results],
    )
