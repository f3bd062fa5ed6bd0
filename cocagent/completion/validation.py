"""Validation rules for client configuration and completion requests."""

from dataclasses import dataclass
from typing import Any

from .errors import ConfigError, RequestError
from .response import CompletionRequest


@dataclass(frozen=True)
class Constraint:
    """Inclusive numeric range."""

    min: float
    max: float
    description: str

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


CONSTRAINTS = {
    "temperature": Constraint(0.0, 1.0, "Controls randomness in AI responses"),
    "max_tokens": Constraint(1, 4096, "Maximum number of tokens in AI response"),
    "suggestions": Constraint(1, 10, "Number of completion suggestions to generate"),
    "prompt_length": Constraint(1, 8000, "Maximum length of input prompt in characters"),
    "api_key_length": Constraint(10, 200, "Expected length range for API keys"),
}

API_KEY_REQUIRED = "apiKey required"
TEMPERATURE_OUT_OF_RANGE = "temperature out of range"
MAX_TOKENS_NOT_POSITIVE = "maxTokens must be positive"
PROMPT_REQUIRED = "prompt required"
MAX_SUGGESTIONS_NOT_POSITIVE = "maxSuggestions must be positive"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(
    provider: str,
    api_key: Any,
    temperature: Any = None,
    max_tokens: Any = None,
) -> None:
    """Validate configuration values before a client is built.

    Args:
        provider: Provider tag used to tag the error
        api_key: API key, must be a non-blank string
        temperature: Optional temperature, must lie in [0, 1]
        max_tokens: Optional token limit, must be a positive whole number

    Raises:
        ConfigError: If any value is invalid
    """
    if not isinstance(api_key, str) or not api_key.strip():
        raise ConfigError(API_KEY_REQUIRED, provider)

    if temperature is not None:
        if not _is_number(temperature) or not CONSTRAINTS["temperature"].contains(temperature):
            raise ConfigError(TEMPERATURE_OUT_OF_RANGE, provider)

    if max_tokens is not None:
        if not _is_integral(max_tokens) or max_tokens <= 0:
            raise ConfigError(MAX_TOKENS_NOT_POSITIVE, provider)


def validate_request(provider: str, request: CompletionRequest) -> None:
    """Validate a completion request.

    Raises:
        RequestError: If the prompt is blank or max_suggestions is not positive
    """
    prompt = request.prompt
    if not isinstance(prompt, str) or not prompt.strip():
        raise RequestError(PROMPT_REQUIRED, provider)

    max_suggestions = request.max_suggestions
    if max_suggestions is not None:
        if not _is_integral(max_suggestions) or max_suggestions <= 0:
            raise RequestError(MAX_SUGGESTIONS_NOT_POSITIVE, provider)


def config_warnings(api_key: str, max_tokens: int) -> list[str]:
    """Return non-blocking warnings for unusual config values."""
    warnings = []

    key_range = CONSTRAINTS["api_key_length"]
    if not key_range.contains(len(api_key.strip())):
        warnings.append(
            f"API key length {len(api_key.strip())} outside expected range "
            f"[{key_range.min}, {key_range.max}]"
        )

    tokens = CONSTRAINTS["max_tokens"]
    if max_tokens > tokens.max:
        warnings.append(f"maxTokens {max_tokens} above provider limit {tokens.max}")

    return warnings


def request_warnings(request: CompletionRequest) -> list[str]:
    """Return non-blocking warnings for unusual request values."""
    warnings = []

    suggestions = CONSTRAINTS["suggestions"]
    if request.effective_max_suggestions > suggestions.max:
        warnings.append(
            f"maxSuggestions {request.effective_max_suggestions} above {suggestions.max}"
        )

    prompt_length = CONSTRAINTS["prompt_length"]
    if len(request.prompt) > prompt_length.max:
        warnings.append(
            f"Prompt length {len(request.prompt)} above {prompt_length.max} characters"
        )

    return warnings
