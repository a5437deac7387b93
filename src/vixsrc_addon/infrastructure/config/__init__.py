from __future__ import annotations

from .load import load_config
from .schema import AddonSettings, AppConfig, EnvOverrides, MissingSettingsError

__all__ = [
    "AddonSettings",
    "AppConfig",
    "EnvOverrides",
    "MissingSettingsError",
    "load_config",
]
