"""Tests for host settings loading and lookup."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml

from cocagent.completion.config import Settings, ai_enabled, load_settings, provider_settings
from cocagent.completion.errors import ConfigError


def create_settings_file(content, suffix=".json") -> Path:
    """Create a temporary settings file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        if isinstance(content, str):
            f.write(content)
        elif suffix == ".json":
            json.dump(content, f)
        else:
            yaml.dump(content, f)
        return Path(f.name)


def test_flat_lookup():
    """Dotted keys resolve directly."""
    settings = Settings({"coc-agent.openai.model": "gpt-4o"})

    assert settings.get("openai.model") == "gpt-4o"


def test_nested_lookup():
    """Nested mappings are walked key by key."""
    settings = Settings({"coc-agent": {"openai": {"model": "gpt-4o"}}})

    assert settings.get("openai.model") == "gpt-4o"


def test_mixed_lookup():
    """A dotted prefix holding a mapping is also supported."""
    settings = Settings({"coc-agent.openai": {"model": "gpt-4o"}})

    assert settings.get("openai.model") == "gpt-4o"


def test_missing_key_default():
    """Missing keys return the default."""
    settings = Settings({"coc-agent": {"openai": {}}})

    assert settings.get("openai.model") is None
    assert settings.get("openai.model", "fallback") == "fallback"


def test_custom_namespace():
    """Namespace prefixes every lookup."""
    settings = Settings({"ai-complete.openai.model": "gpt-4o"}, namespace="ai-complete")

    assert settings.get("openai.model") == "gpt-4o"
    assert Settings({"ai-complete.openai.model": "gpt-4o"}).get("openai.model") is None


def test_section_collects_provider_values():
    """section() gathers every known key for a provider."""
    settings = Settings(
        {
            "coc-agent.claude.apiKey": "k",
            "coc-agent.claude.maxTokens": 50,
            "coc-agent.claude.apiKeyEnv": "ANTHROPIC_API_KEY",
            "coc-agent.claude.unrelated": True,
        }
    )

    assert settings.section("claude") == {
        "apiKey": "k",
        "maxTokens": 50,
        "apiKeyEnv": "ANTHROPIC_API_KEY",
    }


def test_ai_enabled_default_false():
    """AI is disabled unless explicitly enabled."""
    assert ai_enabled(Settings({})) is False
    assert ai_enabled(Settings({"coc-agent.ai.enabled": True})) is True


@pytest.mark.parametrize("value", ["false", "true", "False", 1, "yes"])
def test_ai_enabled_requires_boolean_true(value):
    """Only a real boolean true enables AI."""
    assert ai_enabled(Settings({"coc-agent.ai.enabled": value})) is False


def test_provider_settings_default_provider():
    """Provider defaults to openai."""
    settings = Settings({"coc-agent.ai.enabled": True, "coc-agent.openai.apiKey": "k"})

    assert provider_settings(settings) == ("openai", {"apiKey": "k"})


def test_provider_settings_rejects_non_string_provider():
    """A malformed provider setting is a configuration error."""
    settings = Settings({"coc-agent.ai.enabled": True, "coc-agent.provider": ["openai"]})

    with pytest.raises(ConfigError, match="provider not supported"):
        provider_settings(settings)


def test_load_json_settings():
    """coc-settings.json files are loaded."""
    path = create_settings_file({"coc-agent.ai.enabled": True, "coc-agent.openai.apiKey": "k"})

    try:
        settings = load_settings(path)
        assert settings.get("openai.apiKey") == "k"
        assert ai_enabled(settings)
    finally:
        path.unlink()


def test_load_yaml_settings():
    """YAML settings files are loaded."""
    path = create_settings_file(
        {"coc-agent": {"provider": "claude", "claude": {"apiKey": "k"}}},
        suffix=".yaml",
    )

    try:
        settings = load_settings(path)
        assert settings.get("provider") == "claude"
        assert settings.get("claude.apiKey") == "k"
    finally:
        path.unlink()


def test_load_empty_file():
    """An empty file gives empty settings."""
    path = create_settings_file("", suffix=".yaml")

    try:
        assert load_settings(path).data == {}
    finally:
        path.unlink()


def test_load_missing_file():
    """Missing settings file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_settings("/nonexistent/coc-settings.json")


def test_load_non_mapping():
    """Top-level lists are rejected."""
    path = create_settings_file("- a\n- b\n", suffix=".yaml")

    try:
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_settings(path)
    finally:
        path.unlink()
