from __future__ import annotations

import logging.config
from typing import Any

import structlog

from vixsrc_addon.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# uvicorn's own loggers; everything else goes through the root logger
_UVICORN_LOGGERS: dict[str, dict[str, Any]] = {
    "uvicorn": {"handlers": ["stderr"], "propagate": False},
    "uvicorn.error": {},
    "uvicorn.access": {"handlers": ["stdout"], "propagate": False},
}

# Chatty HTTP libraries; TMDB failures are already logged by the client.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn attaches "color_message", a duplicate of the event with ANSI codes
    event_dict.pop("color_message", None)
    return event_dict


def _shared_processors() -> list[structlog.typing.Processor]:
    """Processors applied to both structlog events and plain stdlib records."""
    return [
        _drop_color_message,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def _renderer(config: AppConfig) -> structlog.typing.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _stream_handler(stream: str) -> dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "formatter": "structlog",
        "stream": f"ext://sys.{stream}",
    }


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """
    Build the dictConfig used for stdlib logging and passed to uvicorn.

    Every handler renders through structlog's ProcessorFormatter, so uvicorn
    and httpx records look like the addon's own events.
    """
    level = config.log_level
    quiet_level = "DEBUG" if level == "DEBUG" else "WARNING"

    loggers: dict[str, dict[str, Any]] = {
        name: {**settings, "level": level}
        for name, settings in _UVICORN_LOGGERS.items()
    }
    loggers.update({name: {"level": quiet_level} for name in _QUIET_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": _shared_processors(),
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(config),
                ],
            }
        },
        "handlers": {
            "stderr": _stream_handler("stderr"),
            "stdout": _stream_handler("stdout"),
        },
        "loggers": loggers,
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """
    Configure structlog and stdlib logging; return the dict for
    ``uvicorn.run(log_config=...)``.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)
    log.info(
        "logging_configured", log_format=config.log_format, log_level=config.log_level
    )
    return cfg
