"""Tests for cocagent/completion/doctor.py - Settings validation."""

import json
import tempfile
from pathlib import Path

from cocagent.completion.config import Settings
from cocagent.completion.doctor import (
    check_settings,
    check_settings_file,
    format_status,
    mask_key,
    print_report,
)


class TestCheckSettings:
    """Test settings validation."""

    def test_valid_openai_settings(self):
        """Valid settings build a client and report its config."""
        settings = Settings(
            {
                "coc-agent.ai.enabled": True,
                "coc-agent.openai.apiKey": "sk-test-key-1234567890",
            }
        )

        result = check_settings(settings)

        assert result["valid"] is True
        assert result["errors"] == []
        assert result["client"]["model"] == "gpt-3.5-turbo"
        assert "sk-test-key-1234567890" not in result["client"]["api_key"]

    def test_disabled_is_valid_with_warning(self):
        """Disabled AI is valid but warned about."""
        result = check_settings(Settings({"coc-agent.openai.apiKey": "sk-test"}))

        assert result["valid"] is True
        assert result["ai_enabled"] is False
        assert result["client"] is None
        assert any("disabled" in w for w in result["warnings"])

    def test_missing_key_warns(self):
        """Enabled without a key is valid but warns."""
        result = check_settings(Settings({"coc-agent.ai.enabled": True, "coc-agent.provider": "claude"}))

        assert result["valid"] is True
        assert result["client"] is None
        assert any("No API key" in w for w in result["warnings"])

    def test_unsupported_provider(self):
        """Unknown provider is an error."""
        result = check_settings(Settings({"coc-agent.provider": "bard"}))

        assert result["valid"] is False
        assert "not supported" in result["errors"][0]

    def test_out_of_range_temperature(self):
        """Invalid values are errors."""
        settings = Settings(
            {
                "coc-agent.ai.enabled": True,
                "coc-agent.openai.apiKey": "sk-test-key-1234567890",
                "coc-agent.openai.temperature": 1.5,
            }
        )

        result = check_settings(settings)

        assert result["valid"] is False
        assert result["errors"] == ["temperature out of range"]

    def test_soft_warnings_reported(self):
        """Short keys and large token limits are warnings."""
        settings = Settings(
            {
                "coc-agent.ai.enabled": True,
                "coc-agent.openai.apiKey": "short",
                "coc-agent.openai.maxTokens": 9000,
            }
        )

        result = check_settings(settings)

        assert result["valid"] is True
        assert len(result["warnings"]) == 2


class TestCheckSettingsFile:
    """Test file-level checks."""

    def test_missing_file(self):
        """Missing file is reported, not raised."""
        result = check_settings_file("/nonexistent/coc-settings.json")

        assert result["valid"] is False
        assert "not found" in result["errors"][0]

    def test_valid_file(self):
        """Settings file round trip through the doctor."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"coc-agent.ai.enabled": True, "coc-agent.openai.apiKey": "sk-test-key-123"}, f)
            path = Path(f.name)

        try:
            result = check_settings_file(str(path))
        finally:
            path.unlink()

        assert result["valid"] is True
        assert result["provider"] == "openai"


def test_mask_key():
    """Keys are masked."""
    assert mask_key("short") == "***"
    assert mask_key("sk-1234567890") == "sk-1...(13 chars)"


def test_format_status():
    assert format_status(True) == "✓"
    assert format_status(False) == "✗"


def test_print_report(capsys):
    """Report prints status and errors."""
    result = check_settings(Settings({"coc-agent.provider": "bard"}))

    print_report("coc-settings.json", result)

    out = capsys.readouterr().out
    assert "Completion Settings Doctor" in out
    assert "INVALID" in out
