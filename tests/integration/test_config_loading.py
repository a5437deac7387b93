"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, .env files and CLI overrides to verify precedence:
defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from vixsrc_addon.infrastructure.config import (
    AddonSettings,
    MissingSettingsError,
    load_config,
)

pytestmark = pytest.mark.integration

_ENV_NAMES = (
    "TMDB_API_KEY",
    "MEDIAFLOW_PROXY_URL",
    "API_PASSWORD",
    "VIXSRC_APP_NAME",
    "VIXSRC_ENVIRONMENT",
    "VIXSRC_HTTP_TIMEOUT_SECONDS",
    "VIXSRC_HTTP_USER_AGENT",
    "VIXSRC_LOG_LEVEL",
    "VIXSRC_LOG_FORMAT",
    "VIXSRC_TMDB_API_KEY",
    "VIXSRC_TMDB_LANGUAGE",
    "VIXSRC_BASE_URL",
    "VIXSRC_VIXSRC_BASE_URL",
    "VIXSRC_MEDIAFLOW_PROXY_URL",
    "VIXSRC_MEDIAFLOW_API_PASSWORD",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset every variable the loader reads; restored after the test.

    setenv first so that values written later by load_dotenv are removed too.
    """
    for name in _ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "vixsrc-test",
        "environment": "test",
        "http": {"timeout_seconds": 5.0, "user_agent": "TestAgent/1.0"},
        "logging": {"level": "DEBUG", "format": "console"},
        "tmdb": {"api_key": "yaml-key", "language": "en-US"},
        "vixsrc": {"base_url": "https://vixsrc.example/"},
        "catalog": {"page_size": 20, "cache_max_age": 60},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI: pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "vixsrc-addon"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 15.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"  # dev → console
        assert config.tmdb.api_key is None
        assert config.tmdb.language == "it-IT"
        assert config.vixsrc.base_url == "https://vixsrc.to"
        assert config.mediaflow.proxy_url is None
        assert config.catalog.cache_max_age == 1300

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    """YAML values override defaults."""

    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "vixsrc-test"
        assert config.environment == "test"
        assert config.http_timeout_seconds == 5.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"
        assert config.tmdb.api_key == "yaml-key"
        assert config.tmdb.language == "en-US"
        assert config.catalog.cache_max_age == 60

    def test_trailing_slash_stripped(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.vixsrc.base_url == "https://vixsrc.example"

    def test_yaml_partial_override_preserves_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({"http": {"timeout_seconds": 99.0}}), "utf-8")

        config = load_config(config_path=path)

        assert config.http_timeout_seconds == 99.0
        assert config.http_user_agent == "vixsrc-addon/1.2.5"
        assert config.tmdb.image_base_url == "https://image.tmdb.org/t/p/w500"

    def test_empty_yaml_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(config_path=path).app_name == "vixsrc-addon"

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(config_path=path)

    def test_invalid_page_size_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"catalog": {"page_size": 0}}), "utf-8")

        with pytest.raises(ValueError):
            load_config(config_path=path)


class TestEnvOverrides:
    """Environment variables override YAML."""

    def test_prefixed_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VIXSRC_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("VIXSRC_TMDB_LANGUAGE", "de-DE")

        config = load_config(config_path=yaml_config)

        assert config.log_level == "ERROR"
        assert config.tmdb.language == "de-DE"

    def test_legacy_env_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "env-key")
        monkeypatch.setenv("MEDIAFLOW_PROXY_URL", "https://mfp.example.com/")
        monkeypatch.setenv("API_PASSWORD", "pw")

        config = load_config()

        assert config.tmdb.api_key == "env-key"
        assert config.mediaflow.proxy_url == "https://mfp.example.com"
        assert config.mediaflow.api_password == "pw"

    @pytest.mark.parametrize("name", ["VIXSRC_BASE_URL", "VIXSRC_VIXSRC_BASE_URL"])
    def test_provider_base_url_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch, name: str
    ) -> None:
        monkeypatch.setenv(name, "https://mirror.example/")

        config = load_config(config_path=yaml_config)

        assert config.vixsrc.base_url == "https://mirror.example"

    def test_env_key_overrides_yaml_key(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VIXSRC_TMDB_API_KEY", "env-key")

        config = load_config(config_path=yaml_config)

        assert config.tmdb.api_key == "env-key"

    def test_dotenv_file_loaded(self, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("TMDB_API_KEY=dotenv-key\n", encoding="utf-8")

        config = load_config(dotenv_path=dotenv)

        assert config.tmdb.api_key == "dotenv-key"

    def test_dotenv_does_not_override_process_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "process-key")
        dotenv = tmp_path / ".env"
        dotenv.write_text("TMDB_API_KEY=dotenv-key\n", encoding="utf-8")

        config = load_config(dotenv_path=dotenv)

        assert config.tmdb.api_key == "process-key"
        assert os.environ["TMDB_API_KEY"] == "process-key"

    def test_dotenv_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    """CLI overrides win over everything."""

    def test_cli_overrides_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VIXSRC_LOG_LEVEL", "ERROR")

        config = load_config(
            config_path=yaml_config, cli_overrides={"log_level": "WARNING"}
        )

        assert config.log_level == "WARNING"

    def test_cli_log_format(self) -> None:
        config = load_config(cli_overrides={"log_format": "json"})
        assert config.log_format == "json"


class TestAddonSettings:
    """Fail-fast extraction of the required addon settings."""

    def test_missing_api_key(self) -> None:
        config = load_config()

        with pytest.raises(MissingSettingsError) as exc_info:
            config.addon_settings()

        assert exc_info.value.missing == ["tmdb.api_key"]

    def test_without_proxy(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "k")

        settings = load_config().addon_settings()

        assert settings == AddonSettings(
            tmdb_api_key="k",
            tmdb_language="it-IT",
            tmdb_base_url="https://api.themoviedb.org/3",
            tmdb_image_base_url="https://image.tmdb.org/t/p/w500",
            provider_base_url="https://vixsrc.to",
        )
        assert settings.proxy_enabled is False

    def test_with_proxy(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "k")
        monkeypatch.setenv("MEDIAFLOW_PROXY_URL", "https://mfp.example.com")
        monkeypatch.setenv("API_PASSWORD", "pw")

        settings = load_config().addon_settings()

        assert settings.proxy_enabled is True
        assert settings.proxy_url == "https://mfp.example.com"
        assert settings.proxy_password == "pw"

    def test_proxy_url_without_password(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "k")
        monkeypatch.setenv("MEDIAFLOW_PROXY_URL", "https://mfp.example.com")

        with pytest.raises(MissingSettingsError) as exc_info:
            load_config().addon_settings()

        assert exc_info.value.missing == ["mediaflow.api_password"]

    def test_password_without_proxy_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_PASSWORD", "pw")

        with pytest.raises(MissingSettingsError) as exc_info:
            load_config().addon_settings()

        assert exc_info.value.missing == ["tmdb.api_key", "mediaflow.proxy_url"]

    def test_empty_proxy_url_means_disabled(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "k")
        monkeypatch.setenv("MEDIAFLOW_PROXY_URL", "")

        settings = load_config().addon_settings()

        assert settings.proxy_url is None

    def test_sectioned_dump_masks_secrets(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "k")
        monkeypatch.setenv("MEDIAFLOW_PROXY_URL", "https://mfp.example.com")
        monkeypatch.setenv("API_PASSWORD", "pw")

        dumped = load_config().to_sectioned_dict()

        assert dumped["tmdb"]["api_key"] == "***"
        assert dumped["mediaflow"]["api_password"] == "***"
        assert dumped["mediaflow"]["proxy_url"] == "https://mfp.example.com"
