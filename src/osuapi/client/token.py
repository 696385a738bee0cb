"""OAuth token state and its background renewal.

The token is held as an immutable snapshot that is replaced wholesale,
so readers never wait on a writer. Renewal runs as a single background
task that sleeps until shortly before the reported expiry.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from osuapi.exceptions import OsuError
from osuapi.logger import get_logger

logger = get_logger(__name__)

# Fraction of the token lifetime after which a renewal is attempted
RENEWAL_FRACTION = 0.95

# Lower bound between renewal attempts, so degenerate lifetimes cannot spin
MIN_RENEWAL_DELAY = 1.0


class Scope(str, Enum):
    """OAuth scopes understood by the API."""

    CHAT_WRITE = "chat.write"
    DELEGATE = "delegate"
    FORUM_WRITE = "forum.write"
    FRIENDS_READ = "friends.read"
    IDENTIFY = "identify"
    LAZER = "lazer"
    PUBLIC = "public"


@dataclass(frozen=True)
class ClientCredentials:
    """App-only access through the client-credentials grant."""

    scope: str = Scope.PUBLIC.value


@dataclass(frozen=True)
class UserAuthorization:
    """User-delegated access through the authorization-code grant.

    The code is single-use: once a refresh token is stored, renewals
    only ever go through the refresh-token grant.
    """

    redirect_uri: str
    code: str
    scopes: str = "identify public"


AuthorizationKind = ClientCredentials | UserAuthorization


class TokenResponse(BaseModel):
    """Body returned by the token endpoint."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., description="Opaque access token")
    token_type: str = Field(default="Bearer", description="Authorization scheme")
    expires_in: int = Field(..., ge=0, description="Lifetime in seconds")
    refresh_token: str | None = Field(
        default=None,
        description="Refresh token (authorization-code grant only)",
    )


@dataclass(frozen=True)
class Token:
    """Immutable token snapshot.

    Attributes:
        access: Full authorization header value, e.g. "Bearer abc".
        refresh: Refresh token for the user flow.
        expires_in: Lifetime in seconds reported at acquisition.
    """

    access: str | None = None
    refresh: str | None = None
    expires_in: int = 0

    @classmethod
    def empty(cls) -> "Token":
        return cls()

    @classmethod
    def from_response(cls, response: TokenResponse) -> "Token":
        return cls(
            access=f"{response.token_type} {response.access_token}",
            refresh=response.refresh_token,
            expires_in=response.expires_in,
        )


class TokenStore:
    """Holds the current token snapshot.

    Reads return the current snapshot without locking. Replacements are
    serialized on an asyncio lock and swap the whole snapshot at once.
    """

    def __init__(self, token: Token | None = None):
        self._token = token or Token.empty()
        self._write_lock = asyncio.Lock()

    def get(self) -> Token:
        return self._token

    @property
    def access(self) -> str | None:
        return self._token.access

    @property
    def refresh(self) -> str | None:
        return self._token.refresh

    async def replace(self, token: Token) -> None:
        async with self._write_lock:
            self._token = token


def token_request_body(
    client_id: int,
    client_secret: str,
    kind: AuthorizationKind,
    refresh_token: str | None = None,
) -> dict[str, Any]:
    """Build the JSON body of a token request.

    Args:
        client_id: OAuth client id.
        client_secret: OAuth client secret.
        kind: Authorization flow selected at construction.
        refresh_token: Currently stored refresh token, if any.

    Returns:
        Grant body ready to be JSON-encoded.
    """
    body: dict[str, Any] = {
        "client_id": client_id,
        "client_secret": client_secret,
    }

    if isinstance(kind, ClientCredentials):
        body["grant_type"] = "client_credentials"
        body["scope"] = kind.scope
    elif refresh_token is not None:
        body["grant_type"] = "refresh_token"
        body["refresh_token"] = refresh_token
    else:
        body["grant_type"] = "authorization_code"
        body["redirect_uri"] = kind.redirect_uri
        body["code"] = kind.code
        body["scope"] = kind.scopes

    return body


def renewal_delay(expires_in: float) -> float:
    """Seconds to wait before renewing a token with the given lifetime.

    For lifetimes of two seconds or more the delay is strictly shorter
    than the lifetime, so the renewal lands before the token expires.
    Shorter or non-positive lifetimes wait MIN_RENEWAL_DELAY.
    """
    delay = min(expires_in * RENEWAL_FRACTION, expires_in - 1.0)
    return max(MIN_RENEWAL_DELAY, delay)


class TokenRefreshLoop:
    """Background task renewing the token before it expires.

    Failures are logged and the loop keeps its previous cadence; the next
    attempt is the next scheduled tick.

    Attributes:
        expires_in: Lifetime used to schedule the next renewal.
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[Token]],
        expires_in: int,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """Configure the loop without starting it.

        Args:
            refresh: Coroutine function acquiring and storing a new token.
            expires_in: Lifetime of the token acquired at startup.
            sleep: Coroutine function used to wait between renewals.
        """
        self._refresh = refresh
        self._sleep = sleep
        self.expires_in = expires_in
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the background task. Calling it again while running is a no-op."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="osuapi-token-refresh")
        logger.debug("Token refresh loop started: expires_in=%d", self.expires_in)

    def stop(self) -> None:
        """Signal the loop to stop without waiting for it to exit."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Token refresh loop stop requested")
        self._task = None

    async def _run(self) -> None:
        while True:
            await self._sleep(renewal_delay(self.expires_in))

            try:
                token = await self._refresh()
            except OsuError as exc:
                logger.error("Token renewal failed: reason=%s", str(exc))
                logger.debug("Token renewal error details: %s", exc, exc_info=True)
                continue

            self.expires_in = token.expires_in
            logger.info("Token renewed: expires_in=%d", token.expires_in)
