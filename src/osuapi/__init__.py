"""osuapi - An asynchronous client for the osu! API v2.

This package provides an authenticated, rate-limited client with
background token renewal and lazily started, awaitable endpoint requests.
"""

__version__ = "0.1.0"

from osuapi.client import Osu, OsuBuilder, Scope
from osuapi.exceptions import (
    ApiResponseError,
    ClientBuildError,
    ConfigError,
    HeaderEncodingError,
    InvalidRequestError,
    NoTokenError,
    NotFoundError,
    OsuError,
    RequestStartedError,
    RequestTimeoutError,
    ResponseParseError,
    ServiceUnavailableError,
    TransportError,
    UnparseableErrorBodyError,
    UrlBuildError,
)
from osuapi.model.enums import GameMode

__all__ = [
    "__version__",
    "Osu",
    "OsuBuilder",
    "Scope",
    "GameMode",
    "OsuError",
    "ConfigError",
    "ClientBuildError",
    "NoTokenError",
    "UrlBuildError",
    "HeaderEncodingError",
    "RequestTimeoutError",
    "TransportError",
    "NotFoundError",
    "ServiceUnavailableError",
    "ApiResponseError",
    "UnparseableErrorBodyError",
    "ResponseParseError",
    "RequestStartedError",
    "InvalidRequestError",
]
