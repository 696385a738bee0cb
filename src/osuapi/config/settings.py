"""Client configuration and sub-configurations.

This module defines the configuration structure for osuapi clients
using Pydantic V2 for validation and type safety.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from osuapi.exceptions import ConfigError, ConfigOverrideError

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 2
DEFAULT_RATELIMIT = 15


class RateLimitConfig(BaseModel):
    """Configuration for the outbound leaky bucket.

    Attributes:
        capacity: Maximum burst of requests admitted without waiting.
        refill_per_second: Steady-state number of requests admitted per second.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    capacity: int = Field(
        default=DEFAULT_RATELIMIT,
        ge=1,
        description="Bucket capacity (burst size)",
    )
    refill_per_second: float = Field(
        default=float(DEFAULT_RATELIMIT),
        gt=0.0,
        description="Units added to the bucket per second",
    )


class ClientConfig(BaseModel):
    """Complete client configuration.

    Credentials are optional here so that a config file can carry only
    tuning options while secrets come from the environment.

    Attributes:
        client_id: OAuth application id.
        client_secret: OAuth application secret.
        redirect_uri: Redirect uri registered for the authorization-code flow.
        scope: Scope requested by the client-credentials flow.
        timeout: Per-attempt timeout in seconds.
        retries: Number of retries after a timed out attempt.
        ratelimit: Outbound rate limit configuration.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    client_id: int | None = Field(default=None, ge=1, description="OAuth client id")
    client_secret: str | None = Field(default=None, description="OAuth client secret")
    redirect_uri: str | None = Field(
        default=None,
        description="Redirect uri for the authorization-code flow",
    )
    scope: str = Field(
        default="public",
        description="Scope requested with client credentials",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0.0,
        description="Per-attempt timeout in seconds",
    )
    retries: int = Field(
        default=DEFAULT_RETRIES,
        ge=0,
        description="Retries after a timed out attempt",
    )
    ratelimit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Outbound rate limit configuration",
    )

    @model_validator(mode="after")
    def secret_required_with_client_id(self) -> "ClientConfig":
        """Validate that an id and a secret are given together.

        Returns:
            Validated ClientConfig instance.

        Raises:
            ValueError: If only one of client_id and client_secret is set.
        """
        if (self.client_id is None) != (self.client_secret is None):
            raise ValueError("client_id and client_secret must be set together")
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "ClientConfig":
        """Load a configuration file.

        An empty file yields the default configuration.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigError: If the YAML cannot be parsed or a value is rejected.
        """
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {path.name}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Expected a mapping at the top of {path.name}")
        return cls._validated(raw, ConfigError, "Configuration")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from environment variables.

        Reads OSU_CLIENT_ID, OSU_CLIENT_SECRET, OSU_REDIRECT_URI,
        OSUAPI_TIMEOUT and OSUAPI_RETRIES. Unset variables keep defaults.

        Returns:
            Validated ClientConfig instance.

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        data: dict[str, Any] = {}
        field_path = ""
        try:
            if (client_id := os.getenv("OSU_CLIENT_ID")) is not None:
                field_path = "client_id"
                data["client_id"] = int(client_id)
            if (secret := os.getenv("OSU_CLIENT_SECRET")) is not None:
                data["client_secret"] = secret
            if (redirect_uri := os.getenv("OSU_REDIRECT_URI")) is not None:
                data["redirect_uri"] = redirect_uri
            if (timeout := os.getenv("OSUAPI_TIMEOUT")) is not None:
                field_path = "timeout"
                data["timeout"] = float(timeout)
            if (retries := os.getenv("OSUAPI_RETRIES")) is not None:
                field_path = "retries"
                data["retries"] = int(retries)
        except ValueError as e:
            raise ConfigError(
                f"Invalid environment value: {e}", field_path=field_path
            ) from e

        return cls._validated(data, ConfigError, "Configuration")

    @classmethod
    def _validated(
        cls,
        data: dict[str, Any],
        error: type[ConfigError],
        label: str,
        field_path: str | None = None,
    ) -> "ClientConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise error(
                f"{label} validation failed: {e}", field_path=field_path
            ) from e

    def to_yaml(self, path: Path) -> None:
        """Write the configuration so that from_yaml reads it back unchanged."""
        document = yaml.safe_dump(
            self.model_dump(mode="python"),
            sort_keys=False,
            default_flow_style=False,
        )
        path.write_text(document, encoding="utf-8")

    def with_overrides(self, overrides: dict[str, Any]) -> "ClientConfig":
        """Return a copy with dotted-path overrides applied.

        Example: ``{"retries": 5, "ratelimit.capacity": 10}``.

        Raises:
            ConfigOverrideError: If a key names no existing field, or the
                resulting configuration fails validation.
        """
        data = self.model_dump(mode="python")
        for key, value in overrides.items():
            *parents, leaf = key.split(".")
            section = data
            for name in parents:
                section = section.get(name)
                if not isinstance(section, dict):
                    break
            if not isinstance(section, dict) or leaf not in section:
                raise ConfigOverrideError(
                    f"Unknown configuration field: {key}", field_path=key
                )
            section[leaf] = value

        changed = ", ".join(overrides) or None
        return self._validated(
            data, ConfigOverrideError, "Override", field_path=changed
        )
