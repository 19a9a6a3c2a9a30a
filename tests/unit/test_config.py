"""
Unit tests for service configuration.
"""

import pytest
from pydantic import ValidationError

from shared.config import ServiceConfig, get_config
from shared.test_helpers import TEST_SECRET


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without a .env file or auth variables in the environment."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "TODO_AUTH_JWT_SECRET",
        "JWT_SECRET",
        "TODO_AUTH_ACCESS_TOKEN_TTL_SECONDS",
        "TODO_AUTH_REFRESH_TOKEN_TTL_SECONDS",
        "TODO_AUTH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestServiceConfig:
    """Test cases for ServiceConfig."""

    def test_defaults(self, clean_env):
        """Test default lifetimes and missing secret."""
        config = get_config("auth", 8010)

        assert config.service_name == "auth"
        assert config.port == 8010
        assert config.jwt_secret is None
        assert config.access_token_ttl_seconds == 900
        assert config.refresh_token_ttl_seconds == 604800

    def test_secret_from_environment(self, clean_env):
        """Test the secret is read from the prefixed variable."""
        clean_env.setenv("TODO_AUTH_JWT_SECRET", TEST_SECRET)

        config = get_config("auth", 8010)

        assert config.jwt_secret.get_secret_value() == TEST_SECRET

    def test_secret_from_plain_variable(self, clean_env):
        """Test the unprefixed JWT_SECRET variable is honoured."""
        clean_env.setenv("JWT_SECRET", TEST_SECRET)

        config = get_config("auth", 8010)

        assert config.jwt_secret.get_secret_value() == TEST_SECRET

    def test_secret_from_env_file(self, clean_env, tmp_path):
        """Test the secret is read from a .env file in the working directory."""
        (tmp_path / ".env").write_text(f"TODO_AUTH_JWT_SECRET={TEST_SECRET}\n")

        config = get_config("auth", 8010)

        assert config.jwt_secret.get_secret_value() == TEST_SECRET

    def test_secret_is_masked(self, clean_env):
        """Test the secret does not leak through repr."""
        clean_env.setenv("TODO_AUTH_JWT_SECRET", TEST_SECRET)

        config = get_config("auth", 8010)

        assert TEST_SECRET not in repr(config)

    def test_lifetimes_from_environment(self, clean_env):
        """Test lifetimes can be configured."""
        clean_env.setenv("TODO_AUTH_ACCESS_TOKEN_TTL_SECONDS", "300")
        clean_env.setenv("TODO_AUTH_REFRESH_TOKEN_TTL_SECONDS", "3600")

        config = get_config("auth", 8010)

        assert config.access_token_ttl_seconds == 300
        assert config.refresh_token_ttl_seconds == 3600

    @pytest.mark.parametrize("access, refresh", [(900, 900), (3600, 900)])
    def test_access_must_be_shorter_than_refresh(self, clean_env, access, refresh):
        """Test inverted lifetimes are rejected at startup."""
        with pytest.raises(ValidationError):
            ServiceConfig(
                "auth", 8010,
                access_token_ttl_seconds=access,
                refresh_token_ttl_seconds=refresh,
            )

    def test_lifetimes_must_be_positive(self, clean_env):
        """Test non-positive lifetimes are rejected."""
        with pytest.raises(ValidationError):
            ServiceConfig("auth", 8010, access_token_ttl_seconds=0)

    def test_log_level_is_normalized(self, clean_env):
        """Test the log level is stored lower-case."""
        clean_env.setenv("TODO_AUTH_LOG_LEVEL", "WARNING")

        config = get_config("auth", 8010)

        assert config.log_level == "warning"

    def test_unknown_log_level_is_rejected(self, clean_env):
        """Test an unknown log level fails configuration loading."""
        clean_env.setenv("TODO_AUTH_LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            get_config("auth", 8010)
