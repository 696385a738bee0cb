"""Shared execution path for every request.

The engine owns the credentials, the token store and the transport. It
attaches the bearer token, sends through the rate-limited transport,
classifies the response and deserializes the body.
"""

import json
from dataclasses import dataclass, field
from typing import TypeVar

import httpx

from osuapi import __version__
from osuapi.client.response import handle_status, parse_body
from osuapi.client.token import (
    AuthorizationKind,
    Token,
    TokenResponse,
    TokenStore,
    token_request_body,
)
from osuapi.client.transport import Transport
from osuapi.exceptions import HeaderEncodingError, NoTokenError, UrlBuildError
from osuapi.logger import get_logger, mask_sensitive
from osuapi.request.base import Request

logger = get_logger(__name__)

T = TypeVar("T")

API_BASE = "https://osu.ppy.sh/api/v2/"
TOKEN_URL = "https://osu.ppy.sh/oauth/token"
USER_AGENT = f"osuapi Python client (v{__version__})"
APPLICATION_JSON = "application/json"
X_API_VERSION = "x-api-version"
API_VERSION = 20220705


@dataclass(frozen=True)
class Credentials:
    """OAuth application credentials, fixed for the client's lifetime."""

    client_id: int
    client_secret: str = field(repr=False)

    def __repr__(self) -> str:
        return (
            f"Credentials(client_id={self.client_id}, "
            f"client_secret={mask_sensitive(self.client_secret)!r})"
        )


def _header_value(token: str) -> str:
    if not token.isascii() or any(ord(ch) < 32 or ord(ch) == 127 for ch in token):
        raise HeaderEncodingError("Access token is not a valid header value")
    return token


class RequestEngine:
    """Composition root of the request pipeline.

    Attributes:
        credentials: OAuth application credentials.
        auth_kind: Authorization flow selected at construction.
        tokens: Current token snapshot holder.
        transport: Rate-limited transport with retry.
    """

    def __init__(
        self,
        credentials: Credentials,
        auth_kind: AuthorizationKind,
        transport: Transport,
        tokens: TokenStore | None = None,
    ):
        self.credentials = credentials
        self.auth_kind = auth_kind
        self.transport = transport
        self.tokens = tokens or TokenStore()

    async def request_token(self) -> TokenResponse:
        """Acquire a token from the OAuth endpoint.

        The grant depends on the authorization kind and on whether a
        refresh token is currently stored.

        Returns:
            Parsed token endpoint response.
        """
        body = token_request_body(
            self.credentials.client_id,
            self.credentials.client_secret,
            self.auth_kind,
            self.tokens.refresh,
        )
        content = json.dumps(body).encode("utf-8")

        request = httpx.Request(
            "POST",
            TOKEN_URL,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": APPLICATION_JSON,
                "Content-Type": APPLICATION_JSON,
                "Content-Length": str(len(content)),
            },
            content=content,
        )

        logger.debug(
            "Requesting token: client_id=%d, grant_type=%s",
            self.credentials.client_id,
            body["grant_type"],
        )
        response = await self.transport.send(request)
        raw = handle_status(response.status_code, response.content)
        return parse_body(raw, TokenResponse)

    async def refresh_token(self) -> Token:
        """Acquire a new token and swap it into the store.

        Returns:
            The stored token snapshot.
        """
        response = await self.request_token()
        token = Token.from_response(response)
        await self.tokens.replace(token)
        logger.debug(
            "Token stored: access=%s, expires_in=%d",
            mask_sensitive(token.access or ""),
            token.expires_in,
        )
        return token

    def build_http_request(self, raw: Request) -> httpx.Request:
        """Turn a raw request into an authorized HTTP request.

        Args:
            raw: Method, path, query and body of an API call.

        Returns:
            Request carrying every fixed header and the bearer token.

        Raises:
            UrlBuildError: If path and query do not form a valid url.
            NoTokenError: If no access token is stored.
            HeaderEncodingError: If the token is not a valid header value.
        """
        url_str = f"{API_BASE}{raw.path}{raw.query}"
        try:
            url = httpx.URL(url_str)
        except httpx.InvalidURL as exc:
            raise UrlBuildError(url_str, cause=exc) from exc

        logger.debug("URL: %s", url)

        access = self.tokens.access
        if access is None:
            raise NoTokenError()

        headers = {
            "Authorization": _header_value(access),
            "User-Agent": USER_AGENT,
            X_API_VERSION: str(API_VERSION),
            "Accept": APPLICATION_JSON,
            "Content-Length": str(len(raw.body)),
        }
        if raw.body:
            headers["Content-Type"] = APPLICATION_JSON

        return httpx.Request(raw.method.value, url, headers=headers, content=raw.body)

    async def execute_raw(self, raw: Request) -> bytes:
        """Send a request and return the body of a successful response."""
        request = self.build_http_request(raw)
        response = await self.transport.send(request)
        return handle_status(response.status_code, response.content)

    async def execute(self, raw: Request, target: type[T]) -> T:
        """Send a request and deserialize the body into the target type."""
        body = await self.execute_raw(raw)
        return parse_body(body, target)

    async def aclose(self) -> None:
        await self.transport.aclose()
