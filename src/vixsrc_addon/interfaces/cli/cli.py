from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from vixsrc_addon.infrastructure.config import MissingSettingsError, load_config
from vixsrc_addon.infrastructure.logging.setup import configure_logging
from vixsrc_addon.interfaces.app import create_app

log = structlog.get_logger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5555
_DEFAULT_DOTENV = Path(".env")

# Exit code when required settings (TMDB key, proxy pair) are absent
EXIT_MISSING_SETTINGS = 2


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vixsrc-addon",
        description="Stremio addon serving VixSrc streams.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help=f"Bind host (env HOST, default {DEFAULT_HOST}).")
    server.add_argument(
        "--port", type=int, help=f"Bind port (env PORT, default {DEFAULT_PORT})."
    )

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", type=Path, help="YAML config file.")
    config.add_argument(
        "--dotenv",
        type=Path,
        help="Env file to load (default: ./.env if it exists).",
    )
    config.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level.",
    )
    config.add_argument(
        "--log-format",
        choices=["json", "console"],
        help="Override the configured log renderer.",
    )

    return parser.parse_args(list(argv) if argv is not None else None)


def _dotenv_path(explicit: Path | None) -> Path | None:
    if explicit is not None:
        return explicit
    return _DEFAULT_DOTENV if _DEFAULT_DOTENV.exists() else None


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    flags = {"log_level": args.log_level, "log_format": args.log_format}
    return {key: value for key, value in flags.items() if value}


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Config is loaded once; the required addon settings are checked before
    uvicorn starts so a misconfigured deployment exits immediately.
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    host = args.host or os.getenv("HOST") or DEFAULT_HOST
    port = args.port
    if port is None:
        port = int(os.getenv("PORT") or DEFAULT_PORT)

    config = load_config(
        config_path=args.config,
        dotenv_path=_dotenv_path(args.dotenv),
        cli_overrides=_cli_overrides(args),
    )
    log_config = configure_logging(config)

    try:
        config.addon_settings()
    except MissingSettingsError as exc:
        log.error("config_missing_settings", missing=exc.missing)
        return EXIT_MISSING_SETTINGS

    log.info("addon_install_url", url=f"http://127.0.0.1:{port}/manifest.json")
    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
