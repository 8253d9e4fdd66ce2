"""Pytest configuration and fixtures."""

import json
from typing import Any

import pytest

from hosting_deploy.config import Settings
from hosting_deploy.core.executor import DeployExecutor
from tests.fakes import FakeInvoker


@pytest.fixture
def test_settings() -> Settings:
    """Settings with fixed values so tests ignore the local environment."""
    return Settings(
        firebase_tools_command="npx firebase-tools",
        deploy_agent="action-hosting-deploy",
    )


@pytest.fixture
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def executor(fake_invoker: FakeInvoker, test_settings: Settings) -> DeployExecutor:
    return DeployExecutor(invoker=fake_invoker, settings=test_settings)


@pytest.fixture
def channel_success_payload() -> dict[str, Any]:
    """Two sites, inserted in order, with different expiry times."""
    return {
        "status": "success",
        "result": {
            "siteA": {
                "site": "siteA",
                "url": "https://a",
                "expireTime": "2024-01-01T00:00:00.000Z",
            },
            "siteB": {
                "site": "siteB",
                "target": "blog",
                "url": "https://b",
                "expireTime": "2024-01-02T00:00:00.000Z",
            },
        },
    }


@pytest.fixture
def channel_success_json(channel_success_payload: dict[str, Any]) -> str:
    return json.dumps(channel_success_payload)


@pytest.fixture
def production_success_json() -> str:
    return json.dumps(
        {
            "status": "success",
            "result": {
                "hosting": "sites/my-project/versions/abc123",
                "functions": ["api", "worker"],
                "firestore": {"rules": "firestore.rules"},
            },
        }
    )
