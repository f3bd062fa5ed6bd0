"""Client factory - resolve a provider tag to a configured client."""

from typing import Any, Mapping

from cocagent.logger import get_logger

from .client import CompletionClient
from .config import Settings, normalize_config, provider_settings
from .providers import get_provider, list_providers
from .response import ClientConfig
from .validation import config_warnings

logger = get_logger("factory")


def create_client(provider: str, config: Mapping[str, Any] | ClientConfig) -> CompletionClient:
    """Build a client fixed to one provider.

    Args:
        provider: Provider tag ("openai", "openai_legacy", "claude")
        config: Raw config values, or an already normalized ClientConfig

    Returns:
        Completion client

    Raises:
        ConfigError: If the provider is not supported or the config is invalid
    """
    adapter = get_provider(provider)

    if isinstance(config, ClientConfig):
        client_config = normalize_config(provider, adapter.defaults, vars(config))
    else:
        client_config = normalize_config(provider, adapter.defaults, config)

    for warning in config_warnings(client_config.api_key, client_config.max_tokens):
        logger.warning("client.config.warning", provider=provider, detail=warning)

    return CompletionClient(adapter, client_config)


def client_from_settings(settings: Settings) -> CompletionClient | None:
    """Build a client from host settings.

    Returns:
        Client, or None when AI is disabled or no API key is configured

    Raises:
        ConfigError: If settings name an unsupported provider or bad values
    """
    resolved = provider_settings(settings)
    if resolved is None:
        return None

    provider, values = resolved
    return create_client(provider, values)


def available_providers() -> list[str]:
    """List supported provider tags."""
    return list_providers()
