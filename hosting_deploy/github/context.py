"""The workflow run's GitHub context."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)


class GitHubContext(BaseModel):
    """Repository, commit and event payload of the current workflow run."""

    repository: str = ""
    sha: str = ""
    event_name: str = ""
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "GitHubContext":
        """Build the context from the runner's ``GITHUB_*`` variables."""
        payload: dict[str, Any] = {}
        event_path = os.environ.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
        elif event_path:
            logger.warning("github.event_path_missing", path=event_path)

        return cls(
            repository=os.environ.get("GITHUB_REPOSITORY", ""),
            sha=os.environ.get("GITHUB_SHA", ""),
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            payload=payload,
        )

    @property
    def owner(self) -> str:
        return self.repository.partition("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.partition("/")[2]

    @property
    def pull_request(self) -> dict[str, Any] | None:
        return self.payload.get("pull_request") or None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def issue_number(self) -> int | None:
        source = self.payload.get("issue") or self.pull_request or {}
        return source.get("number") or self.payload.get("number")

    @property
    def head_sha(self) -> str:
        """Head commit of the pull request, or the run's sha."""
        if self.pull_request:
            return self.pull_request.get("head", {}).get("sha", "") or self.sha
        return self.sha

    @property
    def head_ref(self) -> str:
        if self.pull_request:
            return self.pull_request.get("head", {}).get("ref", "")
        return ""
