"""OpenAI-compatible HTTP providers (chat and legacy completions)."""

from typing import Any, Callable

from cocagent.logger import get_logger

from ..prompt import SYSTEM_INSTRUCTION
from ..response import (
    ClientConfig,
    CompletionRequest,
    CompletionResponse,
    CompletionSuggestion,
    SuggestionType,
    TokenUsage,
    WireRequest,
)
from .base import ProviderDefaults, as_dict, as_list, as_text, post_json

logger = get_logger("openai")

OPENAI_DEFAULTS = ProviderDefaults(
    base_url="https://api.openai.com/v1",
    model="gpt-3.5-turbo",
)

LEGACY_MODEL = "text-davinci-003"

# Confidence by finish_reason; the API does not report one
FINISH_REASON_CONFIDENCE = {
    "stop": 0.9,
    "length": 0.7,
}
DEFAULT_CONFIDENCE = 0.5


def confidence_for(finish_reason: Any) -> float:
    if not isinstance(finish_reason, str):
        return DEFAULT_CONFIDENCE
    return FINISH_REASON_CONFIDENCE.get(finish_reason, DEFAULT_CONFIDENCE)


def _headers(config: ClientConfig) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
    }


def _usage(body: dict) -> TokenUsage | None:
    usage = body.get("usage")
    if not isinstance(usage, dict):
        return None
    return TokenUsage.from_counts(
        usage.get("prompt_tokens"),
        usage.get("completion_tokens"),
        usage.get("total_tokens"),
    )


def parse_choices(
    provider_id: str,
    data: Any,
    choice_text: Callable[[dict], str],
) -> CompletionResponse:
    """Parse an OpenAI-style ``choices`` body.

    One suggestion per choice with non-empty text. Choices are not truncated:
    the suggestion count is already sent to the API as ``n``.

    Args:
        provider_id: Provider tag stamped on the response
        data: Decoded (untrusted) response body
        choice_text: Extracts the raw text from a single choice

    Returns:
        Normalized response, with no suggestions if the body has no choices
    """
    body = as_dict(data)
    choices = body.get("choices")
    if not isinstance(choices, list):
        logger.warning(
            "completion.parse.unexpected_shape",
            provider=provider_id,
            reason="missing choices",
        )

    suggestions = []
    for choice in as_list(choices):
        choice = as_dict(choice)
        text = choice_text(choice)
        if not text:
            continue
        suggestions.append(
            CompletionSuggestion(
                text=text,
                confidence=confidence_for(choice.get("finish_reason")),
                type=SuggestionType.COMPLETION,
            )
        )

    model = body.get("model")
    return CompletionResponse(
        suggestions=suggestions,
        model=model if isinstance(model, str) else None,
        usage=_usage(body),
        provider=provider_id,
    )


def _message_content(choice: dict) -> str:
    return as_text(as_dict(choice.get("message")).get("content"))


def _legacy_text(choice: dict) -> str:
    return as_text(choice.get("text"))


class OpenAIChatProvider:
    """OpenAI ``/chat/completions`` provider."""

    id = "openai"
    defaults = OPENAI_DEFAULTS

    def build_wire_request(
        self, prompt: str, request: CompletionRequest, config: ClientConfig
    ) -> WireRequest:
        payload: dict[str, Any] = {
            "model": config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
            "n": request.effective_max_suggestions,
            "stop": ["\n\n", "```"],
        }
        return WireRequest(
            url=f"{config.base_url}/chat/completions",
            headers=_headers(config),
            payload=payload,
        )

    def send(self, wire: WireRequest, timeout_s: float) -> Any:
        return post_json(wire, timeout_s)

    def parse_response(self, data: Any, max_suggestions: int) -> CompletionResponse:
        return parse_choices(self.id, data, _message_content)


class OpenAILegacyProvider:
    """OpenAI ``/completions`` provider for endpoints without chat support.

    Sends a flat prompt string and always requests the legacy completion model.
    """

    id = "openai_legacy"
    defaults = OPENAI_DEFAULTS

    def build_wire_request(
        self, prompt: str, request: CompletionRequest, config: ClientConfig
    ) -> WireRequest:
        payload: dict[str, Any] = {
            "model": LEGACY_MODEL,
            "prompt": prompt,
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
            "n": request.effective_max_suggestions,
            "stop": ["\n\n"],
        }
        return WireRequest(
            url=f"{config.base_url}/completions",
            headers=_headers(config),
            payload=payload,
        )

    def send(self, wire: WireRequest, timeout_s: float) -> Any:
        return post_json(wire, timeout_s)

    def parse_response(self, data: Any, max_suggestions: int) -> CompletionResponse:
        return parse_choices(self.id, data, _legacy_text)
