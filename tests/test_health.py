"""Tests for completion provider health checks."""

import json
import tempfile
from pathlib import Path
from unittest.mock import Mock, patch

import requests

from cocagent.completion import create_client
from cocagent.completion.health import (
    ProviderHealth,
    check_client_health,
    check_settings_health,
    print_health_report,
)

POST = "cocagent.completion.providers.base.requests.post"


def ok_response(body):
    response = Mock()
    response.status_code = 200
    response.json.return_value = body
    return response


class TestCheckClientHealth:
    """Test probing a client."""

    @patch(POST)
    def test_healthy(self, mock_post):
        """A response with suggestions is healthy."""
        mock_post.return_value = ok_response(
            {
                "choices": [{"message": {"content": "return a + b"}, "finish_reason": "stop"}],
                "model": "gpt-4o-mini",
            }
        )
        client = create_client("openai", {"apiKey": "sk-test-key-123"})

        health = check_client_health(client, timeout_s=3)

        assert health.healthy is True
        assert health.provider_id == "openai"
        assert health.model_tested == "gpt-4o-mini"
        assert health.suggestions == 1
        assert mock_post.call_args[1]["timeout"] == 3.0
        # The original client keeps its own timeout
        assert client.config.timeout_s == 30.0

    @patch(POST)
    def test_empty_response_unhealthy(self, mock_post):
        """No suggestions means unhealthy."""
        mock_post.return_value = ok_response({"content": []})
        client = create_client("claude", {"apiKey": "sk-ant-test"})

        health = check_client_health(client)

        assert health.healthy is False
        assert health.error == "Empty response from provider"

    @patch(POST)
    def test_error_unhealthy(self, mock_post):
        """Transport errors are reported."""
        mock_post.side_effect = requests.ConnectionError("refused")
        client = create_client("claude", {"apiKey": "sk-ant-test"})

        health = check_client_health(client)

        assert health.healthy is False
        assert "Network error" in health.error


class TestCheckSettingsHealth:
    """Test health from a settings file."""

    def test_missing_file(self):
        health = check_settings_health("/nonexistent/coc-settings.json")

        assert health.healthy is False
        assert "not found" in health.error

    def test_disabled(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"coc-agent.openai.apiKey": "sk-test"}, f)
            path = Path(f.name)

        try:
            health = check_settings_health(str(path))
        finally:
            path.unlink()

        assert health.healthy is False
        assert "disabled" in health.error


def test_print_health_report(capsys):
    """Report shows provider status."""
    print_health_report(
        "coc-settings.json",
        ProviderHealth(provider_id="openai", healthy=True, latency_ms=120, model_tested="gpt-4o"),
    )

    out = capsys.readouterr().out
    assert "✓ openai" in out
    assert "latency: 120ms" in out
