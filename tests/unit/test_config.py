"""Unit tests for action inputs."""

import os

import pytest

from hosting_deploy.config import ActionInputs


@pytest.fixture(autouse=True)
def clean_inputs(monkeypatch: pytest.MonkeyPatch):
    """Drop any INPUT_* or token variables leaking from the runner."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key == "GITHUB_TOKEN":
            monkeypatch.delenv(key)


class TestActionInputs:
    """Tests for ActionInputs."""

    def test_defaults(self):
        inputs = ActionInputs()

        assert inputs.entry_point == "."
        assert inputs.config == "firebase.json"
        assert inputs.firebase_tools_version == "latest"
        assert inputs.target_list is None
        assert inputs.is_production_deploy is False
        assert inputs.comments_disabled is False

    def test_reads_input_variables(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("INPUT_PROJECTID", "my-project")
        monkeypatch.setenv("INPUT_CHANNELID", "live")
        monkeypatch.setenv("INPUT_EXPIRES", "7d")
        monkeypatch.setenv("INPUT_DISABLECOMMENT", "true")

        inputs = ActionInputs()

        assert inputs.project_id == "my-project"
        assert inputs.expires == "7d"
        assert inputs.is_production_deploy is True
        assert inputs.comments_disabled is True

    def test_blank_inputs_fall_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch):
        """Test the runner's empty strings for unset inputs keep defaults."""
        monkeypatch.setenv("INPUT_CONFIG", "")
        monkeypatch.setenv("INPUT_FIREBASETOOLSVERSION", "  ")
        monkeypatch.setenv("INPUT_ENTRYPOINT", "")

        inputs = ActionInputs()

        assert inputs.config == "firebase.json"
        assert inputs.firebase_tools_version == "latest"
        assert inputs.entry_point == "."

    def test_targets_split_on_newlines_and_commas(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("INPUT_TARGETS", "hosting:site-a, hosting:site-b\n\n functions ,")

        assert ActionInputs().target_list == ["hosting:site-a", "hosting:site-b", "functions"]

    def test_github_token_wins_over_repo_token(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("INPUT_REPOTOKEN", "from-input")
        assert ActionInputs().github_token == "from-input"

        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        assert ActionInputs().github_token == "from-env"

    def test_construct_by_field_name(self):
        inputs = ActionInputs(project_id="p", channel_id="pr1")

        assert inputs.project_id == "p"
        assert inputs.channel_id == "pr1"
