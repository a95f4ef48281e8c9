"""Unit tests for PromptManager."""

import json

import pytest

from funding_advisor.domain.errors import ConfigurationMissingError
from funding_advisor.prompts.manager import PromptManager


@pytest.fixture
def temp_prompts_dir(tmp_path):
    """Create a temporary prompts directory for testing."""
    prompts_dir = tmp_path / "prompts"
    agent_dir = prompts_dir / "lookup_agent"
    agent_dir.mkdir(parents=True)

    (agent_dir / "v1.txt").write_text("Prompt version 1 content")
    (agent_dir / "v2.txt").write_text("Prompt version 2 content")
    (agent_dir / "v10.txt").write_text("Prompt version 10 content")

    metadata = {
        "v1": {"created": "2026-01-01", "description": "First version"},
        "v2": {"created": "2026-02-01", "description": "Second version"},
    }
    (agent_dir / "metadata.json").write_text(json.dumps(metadata, indent=2))

    (prompts_dir / "funding_advisor").mkdir()
    (prompts_dir / "funding_advisor" / "v1.txt").write_text("   \n")

    return prompts_dir


def test_get_prompt_by_version(temp_prompts_dir):
    manager = PromptManager(base_dir=temp_prompts_dir)
    assert manager.get("lookup_agent", version="v1") == "Prompt version 1 content"


def test_latest_sorts_numerically(temp_prompts_dir):
    manager = PromptManager(base_dir=temp_prompts_dir)
    assert manager.list_versions("lookup_agent") == ["v1", "v2", "v10"]
    assert manager.get("lookup_agent") == "Prompt version 10 content"


def test_get_metadata(temp_prompts_dir):
    manager = PromptManager(base_dir=temp_prompts_dir)
    assert manager.get_metadata("lookup_agent", version="v2")["description"] == "Second version"
    assert manager.get_metadata("funding_advisor", version="v1") == {}


def test_version_not_found(temp_prompts_dir):
    manager = PromptManager(base_dir=temp_prompts_dir)
    with pytest.raises(FileNotFoundError, match="not found"):
        manager.get("lookup_agent", version="v99")


def test_prompt_caching(temp_prompts_dir):
    manager = PromptManager(base_dir=temp_prompts_dir)
    first = manager.get("lookup_agent", version="v1")

    (temp_prompts_dir / "lookup_agent" / "v1.txt").write_text("Changed on disk")

    assert manager.get("lookup_agent", version="v1") is first


class TestResolve:
    def test_template(self, temp_prompts_dir):
        manager = PromptManager(base_dir=temp_prompts_dir)
        assert manager.resolve("lookup_agent") == "Prompt version 10 content"

    def test_override_wins(self, temp_prompts_dir):
        manager = PromptManager(base_dir=temp_prompts_dir)
        assert manager.resolve("lookup_agent", override=" From env ") == "From env"

    def test_blank_override_ignored(self, temp_prompts_dir):
        manager = PromptManager(base_dir=temp_prompts_dir)
        assert manager.resolve("lookup_agent", override="   ") == "Prompt version 10 content"

    def test_empty_template_is_missing(self, temp_prompts_dir):
        manager = PromptManager(base_dir=temp_prompts_dir)
        with pytest.raises(ConfigurationMissingError) as exc_info:
            manager.resolve("funding_advisor")

        assert exc_info.value.code == "MISSING_FUNDING_ADVISOR_AGENT"
        assert exc_info.value.status_code == 500

    def test_missing_directory(self, tmp_path):
        manager = PromptManager(base_dir=tmp_path / "does-not-exist")

        with pytest.raises(ConfigurationMissingError) as exc_info:
            manager.resolve("lookup_agent")

        assert exc_info.value.to_dict()["error"] == "Missing LOOKUP_AGENT configuration"
        assert "LOOKUP_AGENT" in exc_info.value.message
        assert manager.is_configured("lookup_agent") is False
        assert manager.is_configured("lookup_agent", override="custom") is True


def test_bundled_templates_resolve():
    manager = PromptManager()
    assert "companies" in manager.resolve("lookup_agent")
    assert manager.resolve("funding_advisor")
