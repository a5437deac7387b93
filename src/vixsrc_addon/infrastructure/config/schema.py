"""Configuration models: sectioned AppConfig, env overrides, addon settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    BeforeValidator,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class MissingSettingsError(ValueError):
    """Required addon settings are absent; raised once at startup."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required settings: {', '.join(missing)}")


def _strip_url(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip().rstrip("/")
        return value or None
    return value


_Url = Annotated[str, BeforeValidator(_strip_url)]
_OptionalUrl = Annotated[Optional[str], BeforeValidator(_strip_url)]


class TmdbConfig(BaseModel):
    """TMDB API access (YAML section: tmdb.*)."""

    api_key: Optional[str] = Field(
        default=None,
        description="TMDB v3 API key. Required.",
    )
    language: str = Field(
        default="it-IT",
        description="Locale passed to every TMDB request.",
    )
    base_url: _Url = Field(default="https://api.themoviedb.org/3")
    image_base_url: _Url = Field(default="https://image.tmdb.org/t/p/w500")


class VixsrcConfig(BaseModel):
    """Video provider (YAML section: vixsrc.*)."""

    base_url: _Url = Field(
        default="https://vixsrc.to",
        description="Base URL used to build provider links.",
    )


class MediaflowConfig(BaseModel):
    """Optional MediaFlow streaming proxy (YAML section: mediaflow.*).

    Both values must be set together; when both are unset, streams point
    at the provider page directly.
    """

    proxy_url: _OptionalUrl = Field(default=None)
    api_password: Optional[str] = Field(default=None)


class CatalogConfig(BaseModel):
    """Catalog paging and Cache-Control hints (YAML section: catalog.*)."""

    page_size: int = Field(default=20, description="TMDB items per page.")
    cache_max_age: int = Field(default=1300)
    stale_revalidate: int = Field(default=120)
    stale_error: int = Field(default=86_400)

    @field_validator("page_size")
    @classmethod
    def _validate_page_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page_size must be > 0")
        return v


@dataclass(frozen=True)
class AddonSettings:
    """Explicit settings consumed by the TMDB client and stream resolution."""

    tmdb_api_key: str
    tmdb_language: str
    tmdb_base_url: str
    tmdb_image_base_url: str
    provider_base_url: str
    proxy_url: str | None = None
    proxy_password: str | None = None

    @property
    def proxy_enabled(self) -> bool:
        return self.proxy_url is not None and self.proxy_password is not None


class AppConfig(BaseModel):
    """Final, validated addon configuration.

    Built by load.py from sectioned layers
    (http/logging/tmdb/vixsrc/mediaflow/catalog). Environment variables
    arrive through EnvOverrides so load.py controls their precedence.
    """

    app_name: str = Field(default="vixsrc-addon", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for outgoing TMDB requests.",
    )
    http_user_agent: str = Field(
        default="vixsrc-addon/1.2.5",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    tmdb: TmdbConfig = Field(default_factory=TmdbConfig)
    vixsrc: VixsrcConfig = Field(default_factory=VixsrcConfig)
    mediaflow: MediaflowConfig = Field(default_factory=MediaflowConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def addon_settings(self) -> AddonSettings:
        """Build the explicit addon settings, failing on absent required fields."""
        missing: list[str] = []
        if not self.tmdb.api_key:
            missing.append("tmdb.api_key")

        proxy_url = self.mediaflow.proxy_url
        proxy_password = self.mediaflow.api_password
        if proxy_url and not proxy_password:
            missing.append("mediaflow.api_password")
        if proxy_password and not proxy_url:
            missing.append("mediaflow.proxy_url")

        if missing:
            raise MissingSettingsError(missing)

        return AddonSettings(
            tmdb_api_key=self.tmdb.api_key or "",
            tmdb_language=self.tmdb.language,
            tmdb_base_url=self.tmdb.base_url,
            tmdb_image_base_url=self.tmdb.image_base_url,
            provider_base_url=self.vixsrc.base_url,
            proxy_url=proxy_url or None,
            proxy_password=proxy_password or None,
        )

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        Secrets are masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "tmdb": self.tmdb.model_dump(exclude={"api_key"})
            | {"api_key": "***" if self.tmdb.api_key else None},
            "vixsrc": self.vixsrc.model_dump(),
            "mediaflow": {
                "proxy_url": self.mediaflow.proxy_url,
                "api_password": "***" if self.mediaflow.api_password else None,
            },
            "catalog": self.catalog.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Optional overrides read from the process environment.

    Variables:
    - VIXSRC_ENVIRONMENT
    - VIXSRC_HTTP_TIMEOUT_SECONDS
    - VIXSRC_LOG_LEVEL
    - VIXSRC_TMDB_LANGUAGE
    - VIXSRC_BASE_URL / VIXSRC_VIXSRC_BASE_URL
    - TMDB_API_KEY / VIXSRC_TMDB_API_KEY
    - MEDIAFLOW_PROXY_URL / VIXSRC_MEDIAFLOW_PROXY_URL
    - API_PASSWORD / VIXSRC_MEDIAFLOW_API_PASSWORD
    """

    model_config = SettingsConfigDict(
        env_prefix="VIXSRC_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    # Unprefixed names are the ones existing deployments already export.
    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VIXSRC_TMDB_API_KEY", "TMDB_API_KEY"),
    )
    tmdb_language: Optional[str] = None
    vixsrc_base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VIXSRC_BASE_URL", "VIXSRC_VIXSRC_BASE_URL"),
    )
    mediaflow_proxy_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "VIXSRC_MEDIAFLOW_PROXY_URL", "MEDIAFLOW_PROXY_URL"
        ),
    )
    mediaflow_api_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VIXSRC_MEDIAFLOW_API_PASSWORD", "API_PASSWORD"),
    )

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
