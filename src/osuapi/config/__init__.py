"""Configuration management for osuapi.

This package provides the ClientConfig system, including YAML
serialization, environment loading and overrides.
"""

from osuapi.config.settings import (
    DEFAULT_RATELIMIT,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    ClientConfig,
    RateLimitConfig,
)

__all__ = [
    "ClientConfig",
    "RateLimitConfig",
    "DEFAULT_RATELIMIT",
    "DEFAULT_RETRIES",
    "DEFAULT_TIMEOUT",
]
