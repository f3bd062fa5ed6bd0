"""Base provider protocol/interface."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import requests

from ..response import ClientConfig, CompletionRequest, CompletionResponse, WireRequest


@dataclass(frozen=True)
class ProviderDefaults:
    """Values used to fill optional configuration fields."""

    base_url: str
    model: str


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol for completion providers.

    Adapters are stateless: the normalized config is passed to every call so a
    single registered instance can back any number of clients.
    """

    id: str
    defaults: ProviderDefaults

    def build_wire_request(
        self, prompt: str, request: CompletionRequest, config: ClientConfig
    ) -> WireRequest:
        """Translate a built prompt into the provider's HTTP request.

        Args:
            prompt: Prompt text produced by build_prompt
            request: Original completion request
            config: Normalized client configuration

        Returns:
            Wire request (url, headers, JSON payload)
        """
        ...

    def send(self, wire: WireRequest, timeout_s: float) -> Any:
        """POST the wire request and return the decoded JSON body.

        Raises:
            requests.HTTPError: For non-2xx responses
            requests.RequestException: For transport failures
            requests.JSONDecodeError: If the body is not JSON
        """
        ...

    def parse_response(self, data: Any, max_suggestions: int) -> CompletionResponse:
        """Convert an untrusted decoded body into a CompletionResponse."""
        ...


def post_json(wire: WireRequest, timeout_s: float) -> Any:
    """POST a wire request and decode its JSON body.

    Non-2xx responses raise ``requests.HTTPError`` carrying the response; the
    body of a failed response is never parsed.
    """
    response = requests.post(
        wire.url,
        headers=wire.headers,
        json=wire.payload,
        timeout=timeout_s,
    )

    if not 200 <= response.status_code < 300:
        raise requests.HTTPError(
            f"{response.status_code} {response.reason or ''}".strip(),
            response=response,
        )

    return response.json()


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""
