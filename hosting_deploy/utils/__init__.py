"""Utility functions for the hosting deploy action."""

from hosting_deploy.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
