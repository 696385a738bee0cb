"""Unit tests for ClientConfig loading, validation and overrides."""

from pathlib import Path

import pytest

from osuapi.config.settings import (
    DEFAULT_RATELIMIT,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    ClientConfig,
    RateLimitConfig,
)
from osuapi.exceptions import ConfigError, ConfigOverrideError

_ENV_VARS = (
    "OSU_CLIENT_ID",
    "OSU_CLIENT_SECRET",
    "OSU_REDIRECT_URI",
    "OSUAPI_TIMEOUT",
    "OSUAPI_RETRIES",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Fixture clearing every variable read by ClientConfig.from_env."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestClientConfigDefaults:
    def test_defaults_should_match_client_defaults(self) -> None:
        """Verifies an empty config carries the documented defaults.

        Given:
            No configuration values.
        When:
            Creating a ClientConfig.
        Then:
            Timeout is 10s, retries 2 and the bucket holds 15 at 15/s.
        """
        config = ClientConfig()

        assert config.timeout == DEFAULT_TIMEOUT == 10.0
        assert config.retries == DEFAULT_RETRIES == 2
        assert config.ratelimit.capacity == DEFAULT_RATELIMIT == 15
        assert config.ratelimit.refill_per_second == 15.0
        assert config.scope == "public"
        assert config.client_id is None

    def test_client_id_without_secret_should_fail(self) -> None:
        """Verifies credentials must be given together."""
        with pytest.raises(ValueError, match="set together"):
            ClientConfig(client_id=1)

    def test_unknown_field_should_be_rejected(self) -> None:
        with pytest.raises(ValueError):
            ClientConfig.model_validate({"timeout": 5.0, "unknown": True})

    @pytest.mark.parametrize(
        "data",
        [
            {"timeout": 0.0},
            {"retries": -1},
            {"ratelimit": {"capacity": 0}},
            {"ratelimit": {"refill_per_second": 0.0}},
        ],
    )
    def test_out_of_range_values_should_be_rejected(self, data: dict) -> None:
        with pytest.raises(ValueError):
            ClientConfig.model_validate(data)


@pytest.mark.unit
class TestClientConfigYaml:
    def test_from_yaml_should_load_nested_values(self, tmp_path: Path) -> None:
        """Verifies a YAML file populates the configuration.

        Given:
            A YAML file with credentials, retries and a rate limit.
        When:
            Loading it with from_yaml.
        Then:
            Every value is applied, including the nested section.
        """
        path = tmp_path / "client.yaml"
        path.write_text(
            "client_id: 42\n"
            "client_secret: secret\n"
            "retries: 4\n"
            "ratelimit:\n"
            "  capacity: 5\n"
            "  refill_per_second: 2.5\n",
            encoding="utf-8",
        )

        config = ClientConfig.from_yaml(path)

        assert config.client_id == 42
        assert config.client_secret == "secret"
        assert config.retries == 4
        assert config.ratelimit == RateLimitConfig(capacity=5, refill_per_second=2.5)

    def test_from_yaml_missing_file_should_raise_file_not_found(
        self, tmp_path: Path
    ) -> None:
        with pytest.raises(FileNotFoundError):
            ClientConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_invalid_syntax_should_raise_config_error(
        self, tmp_path: Path
    ) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("retries: [1, 2\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ClientConfig.from_yaml(path)

    def test_from_yaml_invalid_value_should_raise_config_error(
        self, tmp_path: Path
    ) -> None:
        path = tmp_path / "invalid.yaml"
        path.write_text("retries: -3\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="validation failed"):
            ClientConfig.from_yaml(path)

    def test_from_yaml_list_document_should_raise_config_error(
        self, tmp_path: Path
    ) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- retries\n- timeout\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Expected a mapping"):
            ClientConfig.from_yaml(path)

    def test_to_yaml_should_round_trip(self, tmp_path: Path) -> None:
        """Verifies an exported config loads back identically."""
        path = tmp_path / "out.yaml"
        config = ClientConfig(client_id=7, client_secret="s", timeout=3.5)

        config.to_yaml(path)

        assert ClientConfig.from_yaml(path) == config


@pytest.mark.unit
class TestClientConfigEnv:
    def test_from_env_should_read_credentials_and_tuning(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        """Verifies environment variables populate the configuration.

        Given:
            Credentials, a timeout and a retry count in the environment.
        When:
            Calling from_env.
        Then:
            Values are converted to their field types.
        """
        clean_env.setenv("OSU_CLIENT_ID", "123")
        clean_env.setenv("OSU_CLIENT_SECRET", "abc")
        clean_env.setenv("OSUAPI_TIMEOUT", "2.5")
        clean_env.setenv("OSUAPI_RETRIES", "0")

        config = ClientConfig.from_env()

        assert config.client_id == 123
        assert config.client_secret == "abc"
        assert config.timeout == 2.5
        assert config.retries == 0

    def test_from_env_without_variables_should_use_defaults(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        assert ClientConfig.from_env() == ClientConfig()

    def test_from_env_non_numeric_id_should_report_field(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("OSU_CLIENT_ID", "not-a-number")
        clean_env.setenv("OSU_CLIENT_SECRET", "abc")

        with pytest.raises(ConfigError) as exc_info:
            ClientConfig.from_env()

        assert exc_info.value.field_path == "client_id"


@pytest.mark.unit
class TestClientConfigOverrides:
    def test_overrides_should_apply_dotted_keys(self) -> None:
        """Verifies nested values can be overridden with dotted keys.

        Given:
            A default config.
        When:
            Overriding retries and ratelimit.capacity.
        Then:
            A new config carries both values and the original is unchanged.
        """
        config = ClientConfig()

        updated = config.with_overrides({"retries": 5, "ratelimit.capacity": 3})

        assert updated.retries == 5
        assert updated.ratelimit.capacity == 3
        assert config.retries == DEFAULT_RETRIES

    def test_unknown_override_key_should_raise(self) -> None:
        with pytest.raises(ConfigOverrideError) as exc_info:
            ClientConfig().with_overrides({"ratelimit.burst": 3})

        assert exc_info.value.field_path == "ratelimit.burst"

    def test_invalid_override_value_should_raise(self) -> None:
        with pytest.raises(ConfigOverrideError, match="validation failed"):
            ClientConfig().with_overrides({"timeout": -1.0})
