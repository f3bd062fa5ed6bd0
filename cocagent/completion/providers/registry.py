"""Provider registration and lookup system."""

from typing import Dict

from ..errors import ConfigError
from .base import ProviderAdapter

PROVIDER_NOT_SUPPORTED = "provider not supported"


class ProviderRegistry:
    """Registry for completion providers."""

    def __init__(self):
        self._providers: Dict[str, ProviderAdapter] = {}

    def register(self, provider: ProviderAdapter) -> None:
        """Register a provider.

        Args:
            provider: Provider instance to register
        """
        self._providers[provider.id] = provider

    def get(self, provider_id: str) -> ProviderAdapter:
        """Get a provider by ID.

        Args:
            provider_id: Provider identifier

        Returns:
            Provider instance

        Raises:
            ConfigError: If provider not found
        """
        if not isinstance(provider_id, str) or provider_id not in self._providers:
            raise ConfigError(PROVIDER_NOT_SUPPORTED, provider_id)
        return self._providers[provider_id]

    def list(self) -> list[str]:
        """List all registered provider IDs."""
        return list(self._providers.keys())


# Global registry instance
_registry = ProviderRegistry()


def register_provider(provider: ProviderAdapter) -> None:
    """Register a provider in the global registry."""
    _registry.register(provider)


def get_provider(provider_id: str) -> ProviderAdapter:
    """Get a provider from the global registry."""
    return _registry.get(provider_id)


def list_providers() -> list[str]:
    """List all registered provider IDs."""
    return _registry.list()
