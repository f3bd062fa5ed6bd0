"""Completion layer - provider-agnostic AI code completion client."""

from .client import CompletionClient
from .config import Settings, load_settings, normalize_config
from .errors import (
    ClientError,
    ConfigError,
    ConfigurationError,
    ParseError,
    ProviderError,
    RequestError,
    TransportError,
    ValidationError,
)
from .factory import available_providers, client_from_settings, create_client
from .prompt import build_prompt
from .response import (
    ClientConfig,
    CompletionRequest,
    CompletionResponse,
    CompletionSuggestion,
    SuggestionType,
    TokenUsage,
)
from .source import CompletionItem, CompletionSource

__all__ = [
    "CompletionClient",
    "CompletionSource",
    "CompletionItem",
    "create_client",
    "client_from_settings",
    "available_providers",
    "build_prompt",
    "Settings",
    "load_settings",
    "normalize_config",
    "ClientConfig",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionSuggestion",
    "SuggestionType",
    "TokenUsage",
    "ClientError",
    "ConfigError",
    "ConfigurationError",
    "RequestError",
    "ValidationError",
    "TransportError",
    "ProviderError",
    "ParseError",
]
