"""Status classification and body deserialization.

Both functions are pure: the outcome depends only on the status code,
the body bytes and the requested target type.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from osuapi.exceptions import (
    ApiResponseError,
    NotFoundError,
    ResponseParseError,
    ServiceUnavailableError,
    UnparseableErrorBodyError,
)
from osuapi.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_adapters: dict[Any, TypeAdapter[Any]] = {}


class ApiErrorPayload(BaseModel):
    """Error body returned by the API for failed requests.

    Attributes:
        error: Error code or message.
        error_description: Longer description (OAuth errors).
        hint: Optional hint from the OAuth server.
        message: Optional human-readable message.
    """

    model_config = ConfigDict(extra="allow")

    error: str | None = Field(default=None, description="Error code or message")
    error_description: str | None = Field(default=None)
    hint: str | None = Field(default=None)
    message: str | None = Field(default=None)


def body_text(body: bytes) -> str:
    """Decode a body for diagnostics without ever failing."""
    return body.decode("utf-8", errors="replace")


def handle_status(status: int, body: bytes) -> bytes:
    """Classify a response by status code.

    Args:
        status: HTTP status code.
        body: Raw response body.

    Returns:
        The body, if the status is 200.

    Raises:
        NotFoundError: On 404.
        ServiceUnavailableError: On 503, carrying the body text.
        ApiResponseError: On other statuses with a parseable error body.
        UnparseableErrorBodyError: On other statuses whose body is not an
            error payload.
    """
    if status == 200:
        return body
    if status == 404:
        raise NotFoundError()
    if status == 503:
        raise ServiceUnavailableError(body_text(body))
    if status == 429:
        logger.warning("Received a 429 response: body=%s", body_text(body)[:200])

    text = body_text(body)
    try:
        payload = ApiErrorPayload.model_validate_json(body)
    except ValidationError as exc:
        raise UnparseableErrorBodyError(status, text, cause=exc) from exc

    raise ApiResponseError(status, text, payload)


def _adapter(target: Any) -> TypeAdapter[Any]:
    adapter = _adapters.get(target)
    if adapter is None:
        adapter = TypeAdapter(target)
        _adapters[target] = adapter
    return adapter


def parse_body(body: bytes, target: type[T]) -> T:
    """Deserialize a successful response body.

    Args:
        body: Raw response body.
        target: Any type pydantic can validate (models, lists, dicts).

    Returns:
        The validated value.

    Raises:
        ResponseParseError: If the body does not match the target shape.
    """
    try:
        return _adapter(target).validate_json(body)
    except ValidationError as exc:
        logger.debug("Response body did not match target: target=%s", target)
        raise ResponseParseError(body_text(body), cause=exc) from exc
