"""Claude messages API provider."""

from typing import Any

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

logger = get_logger("claude")

CLAUDE_DEFAULTS = ProviderDefaults(
    base_url="https://api.anthropic.com",
    model="claude-3-haiku-20240307",
)

ANTHROPIC_VERSION = "2023-06-01"

FIRST_LINE_CONFIDENCE = 0.9
CONFIDENCE_STEP = 0.1


def line_confidence(index: int) -> float:
    """Confidence for the index-th line of a multi-line answer."""
    return round(FIRST_LINE_CONFIDENCE - CONFIDENCE_STEP * index, 2)


def _first_text(content: Any) -> str | None:
    for block in as_list(content):
        block = as_dict(block)
        if block.get("type") != "text":
            continue
        text = as_text(block.get("text"))
        if text:
            return text
    return None


class ClaudeProvider:
    """Anthropic ``/v1/messages`` provider."""

    id = "claude"
    defaults = CLAUDE_DEFAULTS

    def build_wire_request(
        self, prompt: str, request: CompletionRequest, config: ClientConfig
    ) -> WireRequest:
        headers = {
            "x-api-key": config.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": config.model,
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
            "messages": [{"role": "user", "content": prompt}],
            "system": SYSTEM_INSTRUCTION,
        }
        return WireRequest(
            url=f"{config.base_url}/v1/messages",
            headers=headers,
            payload=payload,
        )

    def send(self, wire: WireRequest, timeout_s: float) -> Any:
        return post_json(wire, timeout_s)

    def parse_response(self, data: Any, max_suggestions: int) -> CompletionResponse:
        """Split the first text block into one suggestion per line.

        At most max_suggestions lines are kept, with confidence decaying from
        0.9 by 0.1 per line.
        """
        body = as_dict(data)
        text = _first_text(body.get("content"))
        if text is None:
            logger.warning(
                "completion.parse.unexpected_shape",
                provider=self.id,
                reason="no text content block",
            )

        suggestions = []
        if text:
            lines = [line.strip() for line in text.split("\n") if line.strip()]
            for index, line in enumerate(lines[:max_suggestions]):
                suggestions.append(
                    CompletionSuggestion(
                        text=line,
                        confidence=line_confidence(index),
                        type=SuggestionType.COMPLETION,
                    )
                )

            if not suggestions:
                suggestions.append(
                    CompletionSuggestion(
                        text=text,
                        confidence=FIRST_LINE_CONFIDENCE,
                        type=SuggestionType.COMPLETION,
                    )
                )

        usage = None
        if isinstance(body.get("usage"), dict):
            usage = TokenUsage.from_counts(
                body["usage"].get("input_tokens"),
                body["usage"].get("output_tokens"),
            )

        model = body.get("model")
        return CompletionResponse(
            suggestions=suggestions,
            model=model if isinstance(model, str) else None,
            usage=usage,
            provider=self.id,
        )
