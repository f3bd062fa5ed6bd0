"""
Editor completion source.

Owns the AI completion client for one "AI enabled" session and converts
suggestions into list items the host editor can merge with its own sources.
Every failure on the completion path degrades to "no AI items".
"""

from dataclasses import dataclass

from cocagent.logger import get_logger

from .client import CompletionClient
from .config import Settings
from .errors import ClientError
from .factory import client_from_settings
from .response import CompletionResponse, CompletionRequest

logger = get_logger("source")

CONTEXT_RADIUS = 5
SOURCE_MAX_SUGGESTIONS = 3
DEFAULT_MENU_CONFIDENCE = 0.5


@dataclass(frozen=True)
class CompletionItem:
    """List item handed to the host editor."""

    display_text: str
    menu_label: str
    kind: str
    sort_key: str
    detail: str


def context_window(document_text: str, line: int, radius: int = CONTEXT_RADIUS) -> str:
    """Return the lines within ``radius`` of ``line`` (inclusive)."""
    lines = document_text.split("\n")
    start = max(0, line - radius)
    end = min(len(lines) - 1, line + radius)
    return "\n".join(lines[start:end + 1])


def to_items(response: CompletionResponse) -> list[CompletionItem]:
    """Convert a completion response into editor list items.

    Sort keys start with "0" so AI items are ordered ahead of the editor's
    own completion sources.
    """
    items = []
    for index, suggestion in enumerate(response.suggestions):
        confidence = suggestion.confidence
        if confidence is None:
            confidence = DEFAULT_MENU_CONFIDENCE
        items.append(
            CompletionItem(
                display_text=suggestion.text,
                menu_label=f"[{response.provider} {round(confidence * 100)}%]",
                kind="Text",
                sort_key=f"0{index:03d}",
                detail=f"AI suggestion ({response.model or 'unknown'})",
            )
        )
    return items


class CompletionSource:
    """AI completion source with an explicitly owned client."""

    def __init__(self, client: CompletionClient | None = None):
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def enable(self, settings: Settings) -> bool:
        """Build a client from settings.

        Returns:
            True if a client is now active. Missing keys, disabled AI or
            invalid settings leave the source disabled.
        """
        try:
            self.client = client_from_settings(settings)
        except ClientError as e:
            logger.error(
                "source.enable.failed",
                error_type=type(e).__name__,
                error_message=e.message,
                provider=e.provider,
            )
            self.client = None

        if self.client is not None:
            logger.info(
                "source.enabled",
                provider=self.client.provider,
                model=self.client.config.model,
            )
        return self.enabled

    def disable(self) -> None:
        """Drop the client."""
        if self.client is not None:
            logger.info("source.disabled", provider=self.client.provider)
        self.client = None

    def reload(self, settings: Settings) -> bool:
        """Rebuild the client after a settings change."""
        self.disable()
        return self.enable(settings)

    def toggle(self, settings: Settings) -> bool:
        """Flip the enabled state; returns the new state."""
        if self.enabled:
            self.disable()
            return False
        return self.enable(settings)

    def complete(
        self,
        document_text: str,
        line: int,
        input_text: str,
        language: str | None = None,
    ) -> list[CompletionItem]:
        """Return AI completion items for the cursor position.

        Never raises: any failure yields an empty list so ordinary completion
        is not blocked.
        """
        client = self.client
        if client is None:
            return []

        try:
            request = CompletionRequest(
                prompt=input_text,
                context=context_window(document_text, line),
                language=language,
                max_suggestions=SOURCE_MAX_SUGGESTIONS,
            )
            response = client.get_completions(request)
            return to_items(response)
        except Exception as e:
            logger.warning(
                "source.complete.failed",
                provider=client.provider,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return []
