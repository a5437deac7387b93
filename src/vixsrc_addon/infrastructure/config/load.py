from __future__ import annotations

from collections.abc import Iterator, Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

# Keys that stay at the top level of the sectioned config
_TOP_LEVEL_KEYS = ("app_name", "environment")

# Flat key (ENV/CLI) -> (section, key)
_FLAT_MAP: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "tmdb_api_key": ("tmdb", "api_key"),
    "tmdb_language": ("tmdb", "language"),
    "vixsrc_base_url": ("vixsrc", "base_url"),
    "mediaflow_proxy_url": ("mediaflow", "proxy_url"),
    "mediaflow_api_password": ("mediaflow", "api_password"),
}

_SECTIONS = frozenset(section for section, _ in _FLAT_MAP.values()) | {"catalog"}


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> None:
    """Merge ``layer`` into ``target`` in place; nested mappings merge key by key."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = value


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring one layer into the sectioned shape of config.yaml.

    Section blocks (``tmdb: {...}``) are copied; flat keys such as
    ``tmdb_api_key`` (ENV/CLI style) land in their section. Unknown keys
    are dropped.
    """
    out: dict[str, Any] = {key: layer[key] for key in _TOP_LEVEL_KEYS if key in layer}
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)
    for flat_key, (section, key) in _FLAT_MAP.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(
            f"{config_path}: top level must be a mapping, got {type(parsed)!r}"
        )
    return parsed


def _layers(
    config_path: Path | None, cli_overrides: Mapping[str, Any]
) -> Iterator[Mapping[str, Any]]:
    """Config layers from lowest to highest precedence."""
    yield deepcopy(DEFAULT_CONFIG)
    if config_path is not None:
        yield _yaml_layer(config_path)
    yield EnvOverrides().to_update_dict()
    yield cli_overrides


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration: defaults < YAML file < env vars (incl. .env) < CLI.

    Required addon settings are NOT checked here; call
    ``AppConfig.addon_settings()`` at startup for that.

    Raises:
        FileNotFoundError: an explicitly given YAML or .env file is missing.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Real environment variables win over the file
        load_dotenv(dotenv_path, override=False)

    merged: dict[str, Any] = {}
    for layer in _layers(config_path, cli_overrides or {}):
        _merge_into(merged, _sectioned(layer))
    return AppConfig.model_validate(merged)
