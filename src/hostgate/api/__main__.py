"""
hostgate.api.__main__

Entrypoint for running the FastAPI application via `python -m hostgate.api`.

Responsibilities:
- Parse the few launch-time overrides (config file, bind address, log level).
- Load settings and create the app.
- Start uvicorn with structlog-compatible logging and no proxy-header rewriting.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

import uvicorn

from hostgate.api.app import create_app
from hostgate.settings import Settings, get_settings


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hostgate", description="Run the hostgate API.")
    parser.add_argument("--config", help="JSON settings file (sets HOSTGATE_CONFIG_FILE)")
    parser.add_argument("--host", help="bind address (default: settings.api_host)")
    parser.add_argument("--port", type=int, help="bind port (default: settings.api_port)")
    parser.add_argument("--log-level", help="override settings.log_level")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    if args.config:
        os.environ["HOSTGATE_CONFIG_FILE"] = args.config
        get_settings.cache_clear()
    settings = get_settings()
    overrides = {
        key: value
        for key, value in (("api_host", args.host), ("api_port", args.port), ("log_level", args.log_level))
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: Sequence[str] | None = None) -> None:
    settings = load_settings(parse_args(argv))
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        # The peer address uvicorn reports is the authorization input; X-Forwarded-For
        # must not be able to rewrite it.
        proxy_headers=False,
    )


if __name__ == "__main__":
    main()
