# src/taskdeck/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console connector on an
asyncio loop until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging

from ..cli.bootstrap import create_initial_state, shutdown
from ..config import get_settings
from ..connectors.console_connector import ConsoleRenderer, print_login_hint, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskdeck",
        description="Console client for the task service.",
    )
    parser.add_argument("--api-url", help="API base URL (or set TASKDECK_API_URL)")
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="Keep the credential in memory only (forgotten on exit)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: wait forever)",
    )
    return parser


def _apply_overrides(settings, args: argparse.Namespace):
    changes: dict[str, object] = {}
    if args.api_url:
        changes["api_url"] = args.api_url.strip().rstrip("/")
    if args.ephemeral:
        changes["ephemeral_session"] = True
    if args.timeout is not None:
        changes["request_timeout_seconds"] = args.timeout if args.timeout > 0 else None
    return dataclasses.replace(settings, **changes) if changes else settings


async def _run(settings) -> None:
    state = create_initial_state(settings=settings, on_redirect=print_login_hint)
    renderer = ConsoleRenderer()
    unsubscribe = state.controller.subscribe(renderer)
    try:
        await run_console_loop(state, renderer)
    finally:
        unsubscribe()
        await shutdown(state)


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    settings = _apply_overrides(get_settings(), args)

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (api=%s)...", settings.app_name, settings.api_url)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
