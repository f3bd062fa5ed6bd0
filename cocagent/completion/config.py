"""Client configuration normalization and host settings loading."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .providers.base import ProviderDefaults
from .providers.registry import PROVIDER_NOT_SUPPORTED
from .response import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_S,
    ClientConfig,
)
from .validation import validate_config

DEFAULT_NAMESPACE = "coc-agent"
DEFAULT_PROVIDER = "openai"

# Host settings spell keys in camelCase; both spellings are accepted
_KEY_ALIASES = {
    "api_key": ("apiKey", "api_key"),
    "base_url": ("baseURL", "base_url"),
    "model": ("model",),
    "max_tokens": ("maxTokens", "max_tokens"),
    "temperature": ("temperature",),
    "timeout_s": ("timeout", "timeout_s"),
}


def _lookup(values: Mapping[str, Any], field_name: str) -> Any:
    for key in _KEY_ALIASES[field_name]:
        value = values.get(key)
        if value is not None and value != "":
            return value
    return None


def normalize_config(
    provider: str,
    defaults: ProviderDefaults,
    values: Mapping[str, Any],
) -> ClientConfig:
    """Validate raw config values and fill provider defaults.

    Args:
        provider: Provider tag
        defaults: Provider defaults for base URL and model
        values: Raw values (host or Python key spelling)

    Returns:
        Immutable, fully populated configuration

    Raises:
        ConfigError: If the API key is missing or a value is out of range
    """
    api_key = _lookup(values, "api_key")
    temperature = _lookup(values, "temperature")
    max_tokens = _lookup(values, "max_tokens")

    validate_config(provider, api_key, temperature, max_tokens)

    timeout_s = _lookup(values, "timeout_s")
    if timeout_s is not None:
        if isinstance(timeout_s, bool) or not isinstance(timeout_s, (int, float)) or timeout_s <= 0:
            raise ConfigError("timeout must be positive", provider)

    base_url = _lookup(values, "base_url") or defaults.base_url

    return ClientConfig(
        provider=provider,
        api_key=api_key.strip(),
        base_url=str(base_url).rstrip("/"),
        model=_lookup(values, "model") or defaults.model,
        max_tokens=int(max_tokens) if max_tokens is not None else DEFAULT_MAX_TOKENS,
        temperature=temperature if temperature is not None else DEFAULT_TEMPERATURE,
        timeout_s=float(timeout_s) if timeout_s is not None else DEFAULT_TIMEOUT_S,
    )


class Settings:
    """Read-only view over a host editor settings object.

    Keys are looked up under a namespace, either as flat dotted keys
    (``{"coc-agent.openai.apiKey": ...}``) or as nested mappings
    (``{"coc-agent": {"openai": {"apiKey": ...}}}``).
    """

    def __init__(self, data: Mapping[str, Any] | None = None, namespace: str = DEFAULT_NAMESPACE):
        self.data = dict(data or {})
        self.namespace = namespace

    def get(self, key: str, default: Any = None) -> Any:
        full_key = f"{self.namespace}.{key}"
        if full_key in self.data:
            return self.data[full_key]

        node: Any = self.data
        for part in full_key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return self._get_partial(full_key, default)
            node = node[part]
        return node

    def _get_partial(self, full_key: str, default: Any) -> Any:
        # Mixed form, e.g. {"coc-agent.openai": {"apiKey": ...}}
        parts = full_key.split(".")
        for split in range(len(parts) - 1, 0, -1):
            head = ".".join(parts[:split])
            node = self.data.get(head)
            for part in parts[split:]:
                if not isinstance(node, Mapping) or part not in node:
                    node = None
                    break
                node = node[part]
            if node is not None:
                return node
        return default

    def section(self, key: str) -> dict[str, Any]:
        """Collect every setting below ``<namespace>.<key>`` as a flat dict."""
        result: dict[str, Any] = {}
        for alias_keys in _KEY_ALIASES.values():
            for name in alias_keys:
                value = self.get(f"{key}.{name}")
                if value is not None:
                    result[name] = value
        api_key_env = self.get(f"{key}.apiKeyEnv")
        if api_key_env is not None:
            result["apiKeyEnv"] = api_key_env
        return result


def load_settings(path: str | Path, namespace: str = DEFAULT_NAMESPACE) -> Settings:
    """Load host settings from a JSON or YAML file.

    Args:
        path: Settings file (coc-settings.json or a YAML equivalent)
        namespace: Settings namespace

    Returns:
        Settings view

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file does not contain a mapping
        yaml.YAMLError: If the file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")

    return Settings(data, namespace)


def ai_enabled(settings: Settings) -> bool:
    # Only a real boolean true enables; strings such as "false" do not
    return settings.get("ai.enabled", False) is True


def provider_settings(settings: Settings) -> tuple[str, dict[str, Any]] | None:
    """Resolve the active provider and its raw settings.

    Returns:
        ``(provider, values)``, or None when AI is disabled or no API key is
        configured for the active provider

    Raises:
        ConfigError: If the provider setting is not a string
    """
    if not ai_enabled(settings):
        return None

    provider = settings.get("provider", DEFAULT_PROVIDER)
    if not isinstance(provider, str):
        raise ConfigError(PROVIDER_NOT_SUPPORTED, str(provider))
    values = settings.section(provider)

    if not _has_key(_lookup(values, "api_key")):
        api_key_env = values.get("apiKeyEnv")
        api_key = os.getenv(api_key_env) if isinstance(api_key_env, str) else None
        if not _has_key(api_key):
            return None
        values["apiKey"] = api_key

    return provider, values


def _has_key(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
