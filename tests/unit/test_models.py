"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from hosting_deploy.models.deployment import (
    AuthContext,
    ChannelDeployConfig,
    ProductionDeployConfig,
    SiteDeploy,
)


class TestDeployConfigs:
    """Tests for deploy configuration models."""

    def test_tool_version_defaults_to_latest(self):
        assert ProductionDeployConfig(project_id="p").tool_version == "latest"
        assert ProductionDeployConfig(project_id="p", tool_version="").tool_version == "latest"

    def test_targets_become_a_tuple(self):
        config = ProductionDeployConfig(targets=["a", "b"])
        assert config.targets == ("a", "b")

    def test_blank_target_rejected(self):
        with pytest.raises(ValueError):
            ProductionDeployConfig(targets=["a", ""])

    def test_channel_id_required(self):
        with pytest.raises(ValueError):
            ChannelDeployConfig(channel_id="")

    def test_configs_are_immutable(self):
        config = ChannelDeployConfig(channel_id="pr1")

        with pytest.raises(ValidationError):
            config.channel_id = "pr2"  # type: ignore[misc]

    def test_auth_context_fields_optional(self):
        auth = AuthContext()
        assert auth.credential_file_ref is None
        assert auth.token is None


class TestSiteDeploy:
    """Tests for SiteDeploy."""

    def test_reads_camel_case_expire_time(self):
        site = SiteDeploy.model_validate(
            {"site": "s", "url": "https://s", "expireTime": "2024-01-01T00:00:00Z"}
        )
        assert site.expire_time == "2024-01-01T00:00:00Z"
        assert site.target is None

    def test_accepts_field_name(self):
        site = SiteDeploy(site="s", url="https://s", expire_time="2024-01-01T00:00:00Z")
        assert site.expire_time == "2024-01-01T00:00:00Z"
