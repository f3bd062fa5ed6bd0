"""Completion request, response and configuration data structures."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_MAX_TOKENS = 100
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_SUGGESTIONS = 3
DEFAULT_TIMEOUT_S = 30.0


class SuggestionType(Enum):
    """Kind of text a suggestion carries."""

    COMPLETION = "completion"
    SUGGESTION = "suggestion"
    SNIPPET = "snippet"


@dataclass(frozen=True)
class ClientConfig:
    """Normalized provider configuration.

    Instances are produced by ``normalize_config`` so every field the wire
    protocol needs is present and in range; nothing downstream re-validates.
    """

    provider: str
    api_key: str
    base_url: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout_s: float = DEFAULT_TIMEOUT_S

    def __repr__(self) -> str:
        return (
            f"ClientConfig(provider={self.provider!r}, api_key='***', "
            f"base_url={self.base_url!r}, model={self.model!r}, "
            f"max_tokens={self.max_tokens}, temperature={self.temperature}, "
            f"timeout_s={self.timeout_s})"
        )


@dataclass(frozen=True)
class CompletionRequest:
    """Caller-supplied completion request."""

    prompt: str
    context: str | None = None
    language: str | None = None
    max_suggestions: int | None = None

    @property
    def effective_max_suggestions(self) -> int:
        if self.max_suggestions is None:
            return DEFAULT_MAX_SUGGESTIONS
        return int(self.max_suggestions)


@dataclass(frozen=True)
class CompletionSuggestion:
    """A single suggestion produced by an adapter's parser."""

    text: str
    confidence: float | None = None
    type: SuggestionType | None = None


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting reported by the provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(
        cls,
        prompt_tokens: Any,
        completion_tokens: Any,
        total_tokens: Any = None,
    ) -> "TokenUsage":
        """Build usage from raw wire values, computing the total when absent."""
        prompt = _count(prompt_tokens)
        completion = _count(completion_tokens)
        total = _count(total_tokens) if _is_count(total_tokens) else prompt + completion
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


@dataclass
class CompletionResponse:
    """Normalized completion result."""

    suggestions: list[CompletionSuggestion] = field(default_factory=list)
    model: str | None = None
    usage: TokenUsage | None = None
    provider: str = ""
    request_id: str = ""
    elapsed_ms: int = 0

    def __post_init__(self):
        """Ensure request_id is set."""
        if not self.request_id:
            self.request_id = str(uuid.uuid4())


@dataclass(frozen=True)
class WireRequest:
    """Exact HTTP request an adapter will POST."""

    url: str
    headers: dict[str, str]
    payload: dict[str, Any]


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _count(value: Any) -> int:
    return value if _is_count(value) else 0
