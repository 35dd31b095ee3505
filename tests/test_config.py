"""Tests for provider configuration and the config loader"""

import pytest

import settings
from config.loader import ENV_FILE_VAR, ConfigLoader
from minecraft_oauth import (
    ConfigurationError,
    ErrorKind,
    MicrosoftAuthProvider,
    NATIVE_CLIENT_REDIRECT_URI,
    ProviderConfig,
)


class TestProviderConfig:
    """Tests for ProviderConfig validation"""

    @pytest.mark.parametrize("client_id", ["", None])
    def test_missing_client_id_rejected(self, client_id):
        with pytest.raises(ConfigurationError):
            ProviderConfig(client_id=client_id)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ProviderConfig(client_id="")

    def test_default_redirect_uri(self):
        assert ProviderConfig(client_id="abc").redirect_uri == NATIVE_CLIENT_REDIRECT_URI

    def test_empty_redirect_uri_falls_back_to_default(self):
        assert ProviderConfig(client_id="abc", redirect_uri="").redirect_uri == NATIVE_CLIENT_REDIRECT_URI

    def test_config_is_immutable(self):
        config = ProviderConfig(client_id="abc")

        with pytest.raises(AttributeError):
            config.client_id = "other"

    def test_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "MS_CLIENT_ID", "from-env")
        monkeypatch.setattr(settings, "MS_REDIRECT_URI", "http://localhost/cb")

        config = ProviderConfig.from_settings()

        assert config.client_id == "from-env"
        assert config.redirect_uri == "http://localhost/cb"


class TestProviderConstruction:
    """Provider construction fails fast without a client id"""

    def test_missing_client_id(self):
        with pytest.raises(ConfigurationError):
            MicrosoftAuthProvider()

    def test_empty_client_id(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MicrosoftAuthProvider(client_id="")

        assert exc_info.value.stage is None
        assert exc_info.value.kind is ErrorKind.UNKNOWN

    def test_from_settings_without_client_id(self, monkeypatch):
        monkeypatch.setattr(settings, "MS_CLIENT_ID", "")

        with pytest.raises(ConfigurationError):
            MicrosoftAuthProvider.from_settings()

    def test_redirect_uri_kept(self):
        provider = MicrosoftAuthProvider(client_id="abc", redirect_uri="http://localhost/cb")

        assert provider.client_id == "abc"
        assert provider.redirect_uri == "http://localhost/cb"


class TestConfigLoader:
    """Tests for ConfigLoader lookup, coercion and env file selection"""

    @pytest.fixture
    def loader(self, tmp_path):
        return ConfigLoader(env_path=str(tmp_path / "missing.env"))

    def test_default_when_unset(self, loader, monkeypatch):
        monkeypatch.delenv("MC_TEST_VALUE", raising=False)

        assert loader.get("MC_TEST_VALUE", 30.0) == 30.0

    def test_float_coercion(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "12.5")

        assert loader.get("MC_TEST_VALUE", 30.0) == 12.5

    def test_invalid_float_uses_default(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "soon")

        assert loader.get("MC_TEST_VALUE", 30.0) == 30.0

    def test_bool_coercion(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "yes")

        assert loader.get("MC_TEST_VALUE", False) is True

    def test_env_file_loaded(self, tmp_path, monkeypatch):
        # setenv first so teardown removes whatever load_dotenv adds
        monkeypatch.setenv("MC_TEST_CLIENT", "placeholder")
        monkeypatch.delenv("MC_TEST_CLIENT")
        env_file = tmp_path / ".env"
        env_file.write_text("MC_TEST_CLIENT=client-from-file\n")

        loader = ConfigLoader(env_path=str(env_file))

        assert loader.get("MC_TEST_CLIENT", "") == "client-from-file"

    def test_invalid_bool_uses_default(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "maybe")

        assert loader.get("MC_TEST_VALUE", True) is True

    def test_off_is_false(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "off")

        assert loader.get("MC_TEST_VALUE", True) is False

    def test_empty_value_uses_default(self, loader, monkeypatch):
        monkeypatch.setenv("MC_TEST_VALUE", "  ")

        assert loader.get("MC_TEST_VALUE", "fallback") == "fallback"

    def test_missing_env_file_not_loaded(self, loader):
        assert loader.loaded_from is None

    def test_env_file_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MC_TEST_TIMEOUT", "placeholder")
        monkeypatch.delenv("MC_TEST_TIMEOUT")
        env_file = tmp_path / "login.env"
        env_file.write_text("MC_TEST_TIMEOUT=5\n")
        monkeypatch.setenv(ENV_FILE_VAR, str(env_file))

        loader = ConfigLoader()

        assert loader.loaded_from == env_file
        assert loader.get("MC_TEST_TIMEOUT", 30) == 5

    def test_environment_beats_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MC_TEST_CLIENT", "client-from-env")
        env_file = tmp_path / ".env"
        env_file.write_text("MC_TEST_CLIENT=client-from-file\n")

        loader = ConfigLoader(env_path=str(env_file))

        assert loader.get("MC_TEST_CLIENT", "") == "client-from-env"
