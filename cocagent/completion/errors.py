"""Normalized error taxonomy for completion clients."""


class ClientError(Exception):
    """Base error raised by the completion layer.

    Every failure a caller can see is a ClientError (or subclass), tagged with
    the provider that produced it so callers never handle adapter-specific
    exception types.

    Attributes:
        message: Human-readable description
        provider: Provider tag (e.g., "openai", "claude")
        status_code: HTTP status for provider-reported failures
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        details = []
        if self.provider:
            details.append(f"provider={self.provider}")
        if self.status_code is not None:
            details.append(f"status={self.status_code}")
        if not details:
            return self.message
        return f"{self.message} ({', '.join(details)})"


class ConfigError(ClientError):
    """Bad or missing credentials/settings. Raised at construction."""


class RequestError(ClientError):
    """Malformed completion request. Raised before any network call."""


class TransportError(ClientError):
    """Network unreachable, DNS failure, timeout or connection reset."""


class ProviderError(ClientError):
    """Non-2xx HTTP status returned by the remote API."""


class ParseError(ClientError):
    """2xx response whose body could not be decoded."""


ConfigurationError = ConfigError
ValidationError = RequestError
