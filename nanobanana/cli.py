"""Process entry point for the nanobanana MCP server."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import LOG_LEVELS, Settings, load_settings
from .errors import ConfigurationError
from .events import event_writer_for
from .files.store import ImageStore
from .providers.gemini import GeminiGateway
from .server import SERVER_NAME, SERVER_VERSION, serve
from .session.controller import SessionController
from .utils import load_dotenv, setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=SERVER_NAME, description="Gemini image generation over MCP (stdio)")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: NANOBANANA_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before reading configuration")
    parser.add_argument("--version", action="version", version=f"%(prog)s {SERVER_VERSION}")
    return parser


def build_controller(settings: Settings) -> SessionController:
    store = ImageStore()
    gateway = GeminiGateway(settings=settings, store=store)
    return SessionController(gateway, store=store, events=event_writer_for(settings.events_path))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    load_dotenv(Path(args.env_file) if args.env_file else None)
    try:
        settings = load_settings()
        setup_logging(args.log_level if args.log_level else settings.log_level)
        controller = build_controller(settings)
    except ConfigurationError as exc:
        sys.stderr.write(f"Failed to initialize {SERVER_NAME}: {exc}\n")
        return 1
    try:
        asyncio.run(serve(controller))
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        sys.stderr.write(f"Failed to start {SERVER_NAME}: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
