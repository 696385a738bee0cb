"""Core exception hierarchy for osuapi.

This module defines all custom exceptions raised by the client.
All exceptions inherit from OsuError for unified error handling.
"""

from typing import Any


class OsuError(Exception):
    """Base exception for all osuapi errors.

    All custom exceptions in the package inherit from this class,
    allowing callers to catch every client failure with a single
    except clause.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            cause: Optional underlying exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ConfigError(OsuError):
    """Raised when configuration validation fails.

    This includes invalid YAML files, unknown fields, type mismatches,
    or values outside their allowed range.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Human-readable error description.
            field_path: Optional dotted path to the problematic field
                (e.g., "ratelimit.capacity").
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.field_path = field_path

    def __str__(self) -> str:
        """Return string representation including field path."""
        base_msg = super().__str__()
        if self.field_path:
            return f"{base_msg} (field: {self.field_path})"
        return base_msg


class ConfigOverrideError(ConfigError):
    """Raised when applying invalid configuration overrides."""

    pass


class ClientBuildError(OsuError):
    """Raised when a client cannot be constructed.

    The most common cause is the very first token acquisition failing,
    in which case no client is ever produced.
    """

    pass


class NoTokenError(OsuError):
    """Raised when a request is sent while no access token is stored."""

    def __init__(self) -> None:
        super().__init__("No access token available, the client is not authorized")


class UrlBuildError(OsuError):
    """Raised when a request path and query do not form a valid URL."""

    def __init__(self, url: str, cause: Exception | None = None):
        super().__init__(f"Failed to build url: {url}", cause)
        self.url = url


class HeaderEncodingError(OsuError):
    """Raised when the access token cannot be encoded as a header value."""

    pass


class RequestTimeoutError(OsuError):
    """Raised when every attempt of a request timed out."""

    def __init__(self, attempts: int):
        super().__init__(f"Request timed out after {attempts} attempt(s)")
        self.attempts = attempts


class TransportError(OsuError):
    """Raised on non-timeout network failures (connection, TLS, protocol)."""

    pass


class NotFoundError(OsuError):
    """Raised when the API responds with 404."""

    def __init__(self) -> None:
        super().__init__("The API returned a 404")


class ServiceUnavailableError(OsuError):
    """Raised when the API responds with 503.

    The provider uses this status for maintenance notices, so the raw
    body is kept as the message source.
    """

    def __init__(self, body: str):
        super().__init__(f"API may be temporarily unavailable (received 503): {body}")
        self.body = body


class ApiResponseError(OsuError):
    """Raised when the API responds with an error payload.

    Attributes:
        status: HTTP status code of the response.
        body: Raw response body text.
        payload: Parsed error payload.
    """

    def __init__(self, status: int, body: str, payload: Any):
        super().__init__(f"API responded with status {status}: {body}")
        self.status = status
        self.body = body
        self.payload = payload


class UnparseableErrorBodyError(OsuError):
    """Raised when an error response body does not match the error shape."""

    def __init__(self, status: int, body: str, cause: Exception | None = None):
        super().__init__(
            f"Failed to parse error response (status {status}): {body}", cause
        )
        self.status = status
        self.body = body


class ResponseParseError(OsuError):
    """Raised when a successful response body does not match its target type."""

    def __init__(self, body: str, cause: Exception | None = None):
        super().__init__("Failed to deserialize response body", cause)
        self.body = body


class RequestStartedError(OsuError):
    """Raised when configuring a request that has already started."""

    def __init__(self, request_name: str):
        super().__init__(
            f"Cannot configure {request_name}: the request has already started"
        )
        self.request_name = request_name


class InvalidRequestError(OsuError):
    """Raised when a request is driven without the parameters it needs."""

    def __init__(self, request_name: str, reason: str):
        super().__init__(f"Cannot send {request_name}: {reason}")
        self.request_name = request_name
