"""Client, request engine and their building blocks."""

from osuapi.client.builder import OsuBuilder
from osuapi.client.engine import Credentials, RequestEngine
from osuapi.client.osu import Osu
from osuapi.client.ratelimit import RateLimiter
from osuapi.client.token import (
    AuthorizationKind,
    ClientCredentials,
    Scope,
    Token,
    TokenRefreshLoop,
    TokenStore,
    UserAuthorization,
)
from osuapi.client.transport import Transport

__all__ = [
    "AuthorizationKind",
    "ClientCredentials",
    "Credentials",
    "Osu",
    "OsuBuilder",
    "RateLimiter",
    "RequestEngine",
    "Scope",
    "Token",
    "TokenRefreshLoop",
    "TokenStore",
    "Transport",
    "UserAuthorization",
]
