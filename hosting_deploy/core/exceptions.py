"""Custom exceptions for the hosting deploy action."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hosting_deploy.core.invoker import CapturedOutput


class HostingDeployError(Exception):
    """Base exception for the hosting deploy action."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(HostingDeployError):
    """Action inputs or the working tree are not usable for a deploy."""

    pass


class ProcessFailure(HostingDeployError):
    """The deploy tool exited non-zero or could not be started."""

    def __init__(
        self,
        message: str,
        output: "CapturedOutput",
        returncode: int | None = None,
    ):
        super().__init__(message, {"returncode": returncode})
        self.output = output
        self.returncode = returncode


class MalformedResultError(HostingDeployError):
    """The deploy tool output is not a recognizable JSON result."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(
            f"Malformed deploy result: {message}",
            {"raw_text": raw_text[:1000]},
        )
        self.raw_text = raw_text


class PreconditionError(HostingDeployError):
    """A result violated a contract the deploy tool is expected to honor."""

    pass


class DeploymentError(HostingDeployError):
    """The deploy tool reported ``status: "error"``."""

    def __init__(self, message: str):
        super().__init__(message, {"reported_by": "firebase-tools"})
