"""
Basic tests for the Velixar package: imports, configuration and construction.
"""

import httpx
import pytest
from pydantic import ValidationError

from velixar import (
    DEFAULT_BASE_URL,
    VelixarAPIError,
    VelixarClient,
    VelixarConfig,
    VelixarConfigError,
    VelixarError,
    VelixarNotFoundError,
    VelixarSettings,
    create_velixar_client,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without VELIXAR_* variables or a stray .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("VELIXAR_API_KEY", "VELIXAR_BASE_URL", "VELIXAR_TELEMETRY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_imports():
    """Test that all essential imports work."""
    assert VelixarClient is not None
    assert VelixarConfig is not None
    assert create_velixar_client is not None
    assert issubclass(VelixarAPIError, VelixarError)
    assert issubclass(VelixarNotFoundError, VelixarAPIError)
    assert issubclass(VelixarConfigError, ValueError)


class TestVelixarConfig:
    def test_defaults(self):
        config = VelixarConfig(api_key="test-key")

        assert config.api_key == "test-key"
        assert config.base_url == DEFAULT_BASE_URL == "https://api.velixarai.com"
        assert config.telemetry is False

    def test_custom_base_url_overrides_default(self):
        config = VelixarConfig(api_key="test-key", base_url="https://custom.api.com")
        assert config.base_url == "https://custom.api.com"

    def test_empty_base_url_falls_back_to_default(self):
        assert VelixarConfig(api_key="k", base_url="").base_url == DEFAULT_BASE_URL
        assert VelixarConfig(api_key="k", base_url=None).base_url == DEFAULT_BASE_URL

    def test_api_key_required(self):
        with pytest.raises(ValidationError):
            VelixarConfig()
        with pytest.raises(ValidationError):
            VelixarConfig(api_key="")

    def test_blank_api_key_rejected(self):
        with pytest.raises(ValidationError, match="blank"):
            VelixarConfig(api_key="   ")

    def test_config_is_immutable(self):
        config = VelixarConfig(api_key="test-key")
        with pytest.raises(ValidationError):
            config.api_key = "other"

    def test_api_key_not_in_repr(self):
        assert "secret-key" not in repr(VelixarConfig(api_key="secret-key"))


class TestSettings:
    def test_from_settings_reads_environment(self, clean_env):
        clean_env.setenv("VELIXAR_API_KEY", "env-key")
        clean_env.setenv("VELIXAR_BASE_URL", "https://staging.velixar.test")
        clean_env.setenv("VELIXAR_TELEMETRY", "true")

        config = VelixarConfig.from_settings()

        assert config.api_key == "env-key"
        assert config.base_url == "https://staging.velixar.test"
        assert config.telemetry is True

    def test_explicit_values_override_environment(self, clean_env):
        clean_env.setenv("VELIXAR_API_KEY", "env-key")

        config = VelixarConfig.from_settings(api_key="explicit-key", telemetry=None)

        assert config.api_key == "explicit-key"
        assert config.telemetry is False

    def test_missing_api_key_raises_config_error(self, clean_env):
        with pytest.raises(VelixarConfigError, match="VELIXAR_API_KEY"):
            VelixarConfig.from_settings(settings=VelixarSettings(_env_file=None))

    def test_blank_api_key_in_environment_raises_config_error(self, clean_env):
        clean_env.setenv("VELIXAR_API_KEY", "   ")

        with pytest.raises(VelixarConfigError):
            VelixarConfig.from_settings()


class TestClientCreation:
    @pytest.mark.asyncio
    async def test_client_creation(self):
        config = VelixarConfig(api_key="test-key")
        client = VelixarClient(config)

        assert client.config == config
        assert client._client is not None
        assert client._owns_client is True

        await client.close()
        assert client._client.is_closed

    @pytest.mark.asyncio
    async def test_injected_http_client_is_not_closed(self):
        http_client = httpx.AsyncClient()
        client = VelixarClient(VelixarConfig(api_key="k"), http_client=http_client)

        async with client:
            assert client._client is http_client

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_instances_are_independent(self):
        a = VelixarClient(VelixarConfig(api_key="key-a"))
        b = VelixarClient(VelixarConfig(api_key="key-b", base_url="https://b.test"))

        assert a.config.api_key == "key-a"
        assert b.config.base_url == "https://b.test"
        assert a._client is not b._client

        await a.close()
        await b.close()

    @pytest.mark.asyncio
    async def test_create_velixar_client(self, clean_env):
        clean_env.setenv("VELIXAR_BASE_URL", "https://env.velixar.test")

        async with create_velixar_client(api_key="test-key") as client:
            assert client.config.api_key == "test-key"
            assert client.config.base_url == "https://env.velixar.test"

    def test_create_velixar_client_without_key(self, clean_env):
        with pytest.raises(VelixarConfigError):
            create_velixar_client()

    @pytest.mark.asyncio
    async def test_from_env(self, clean_env):
        clean_env.setenv("VELIXAR_API_KEY", "env-key")

        client = VelixarClient.from_env(telemetry=True)

        assert client.config.api_key == "env-key"
        assert client.config.telemetry is True
        await client.close()
