"""GitHub Actions workflow commands and step outputs."""

import json
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _to_command_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def issue_command(command: str, message: str = "") -> None:
    """Write a ``::command::message`` line for the runner to pick up."""
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def set_output(name: str, value: Any) -> None:
    """Set a step output; lists and mappings are JSON encoded."""
    text = _to_command_value(value)
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        # Outside a runner there is nowhere to put it
        issue_command("debug", f"output {name}={text}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")


def set_failed(message: str) -> None:
    """Mark the step failed with an error annotation."""
    issue_command("error", message)


def start_group(name: str) -> None:
    issue_command("group", name)


def end_group() -> None:
    issue_command("endgroup")


@contextmanager
def group(name: str) -> Iterator[None]:
    """Fold everything logged inside the block under ``name``."""
    start_group(name)
    try:
        yield
    finally:
        end_group()
