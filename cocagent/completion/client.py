"""Main completion client interface."""

import time
import uuid

import requests

from cocagent.logger import get_logger

from .errors import ClientError, ParseError, ProviderError, TransportError
from .prompt import build_prompt
from .providers.base import ProviderAdapter
from .response import ClientConfig, CompletionRequest, CompletionResponse
from .validation import request_warnings, validate_request

logger = get_logger("client")


class CompletionClient:
    """Completion client bound to one provider for its lifetime."""

    def __init__(self, adapter: ProviderAdapter, config: ClientConfig):
        """Initialize client.

        Args:
            adapter: Provider adapter implementing the wire protocol
            config: Normalized configuration (see normalize_config)
        """
        self.adapter = adapter
        self.config = config

    @property
    def provider(self) -> str:
        return self.config.provider

    def get_completions(self, request: CompletionRequest) -> CompletionResponse:
        """Fetch completion suggestions for a request.

        Issues exactly one HTTP request; failures are not retried.

        Args:
            request: Completion request

        Returns:
            Normalized completion response

        Raises:
            RequestError: If the request is invalid (no network call is made)
            ProviderError: For non-2xx responses, with status_code set
            TransportError: For network failures and timeouts
            ParseError: If the response body is not JSON
            ClientError: For any other failure
        """
        validate_request(self.provider, request)

        request_id = str(uuid.uuid4())
        for warning in request_warnings(request):
            logger.warning("completion.request.warning", request_id, detail=warning)

        logger.info(
            "completion.start",
            request_id,
            provider=self.provider,
            model=self.config.model,
            max_suggestions=request.effective_max_suggestions,
            language=request.language,
        )

        start_time = time.time()
        try:
            prompt = build_prompt(request.prompt, request.context, request.language)
            wire = self.adapter.build_wire_request(prompt, request, self.config)
            data = self.adapter.send(wire, self.config.timeout_s)
            response = self.adapter.parse_response(data, request.effective_max_suggestions)
        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            error = self._normalize_error(e, elapsed_ms)

            logger.error(
                "completion.error",
                request_id,
                provider=self.provider,
                error_type=type(error).__name__,
                error_message=error.message,
                status_code=error.status_code,
                elapsed_ms=elapsed_ms,
            )

            raise error from e

        response.provider = self.provider
        response.request_id = request_id
        response.elapsed_ms = int((time.time() - start_time) * 1000)

        logger.info(
            "completion.success",
            request_id,
            provider=self.provider,
            model=response.model,
            suggestions=len(response.suggestions),
            usage=vars(response.usage) if response.usage else None,
            elapsed_ms=response.elapsed_ms,
        )

        return response

    def _normalize_error(self, error: Exception, elapsed_ms: int) -> ClientError:
        if isinstance(error, ClientError):
            return error

        if isinstance(error, requests.HTTPError):
            status_code = error.response.status_code if error.response is not None else None
            return ProviderError(
                f"{self.provider} API error: {error}",
                self.provider,
                status_code=status_code,
                cause=error,
            )

        if isinstance(error, requests.Timeout):
            return TransportError(
                f"Request timed out after {elapsed_ms}ms "
                f"(timeout: {self.config.timeout_s}s)",
                self.provider,
                cause=error,
            )

        # JSONDecodeError is also a RequestException, so check it first
        if isinstance(error, (requests.JSONDecodeError, ValueError)):
            return ParseError(
                f"Invalid response body: {error}",
                self.provider,
                cause=error,
            )

        if isinstance(error, requests.RequestException):
            return TransportError(
                "Network error: Unable to connect to AI service",
                self.provider,
                cause=error,
            )

        return ClientError(
            f"Unexpected error: {error}",
            self.provider,
            cause=error,
        )
