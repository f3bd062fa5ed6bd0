"""Completion provider implementations."""

from .base import ProviderAdapter, ProviderDefaults
from .claude import ClaudeProvider
from .openai_compat import OpenAIChatProvider, OpenAILegacyProvider
from .registry import get_provider, list_providers, register_provider

# Register providers
register_provider(OpenAIChatProvider())
register_provider(OpenAILegacyProvider())
register_provider(ClaudeProvider())

__all__ = [
    "ProviderAdapter",
    "ProviderDefaults",
    "OpenAIChatProvider",
    "OpenAILegacyProvider",
    "ClaudeProvider",
    "register_provider",
    "get_provider",
    "list_providers",
]
