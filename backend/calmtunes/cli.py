"""Shared plumbing for the one-shot scripts under ``calmtunes.scripts``."""
from __future__ import annotations
import argparse
import asyncio
from typing import Awaitable, Callable, Optional, Sequence

from calmtunes.config import Settings, load_settings
from calmtunes.exceptions import CalmTunesException, UsageError
from calmtunes.logger import configure_logging, get_logger

logger = get_logger("cli")

Entry = Callable[[Settings], Awaitable[int]]


class ArgumentParser(argparse.ArgumentParser):
    """argparse that reports bad arguments as ``UsageError`` instead of exiting with 2."""

    def error(self, message):
        raise UsageError(f"{self.prog}: {message}")


def parse_args(parser: argparse.ArgumentParser, argv: Optional[Sequence[str]] = None) -> Optional[argparse.Namespace]:
    """Parsed arguments, or None after logging the usage line."""
    try:
        return parser.parse_args(argv)
    except UsageError as exc:
        logger.error(f"❌ {exc.message}")
        logger.error(parser.format_usage().strip())
        return None


def execute(entry: Entry, settings: Optional[Settings] = None) -> int:
    """
    Load settings, run ``entry`` to completion and map the outcome to an exit
    code: 0 on success, 1 on any CalmTunes error.
    """
    try:
        settings = settings or load_settings()
    except CalmTunesException as exc:
        logger.error(f"❌ {exc.message}")
        return 1

    configure_logging(settings.log_level, settings.log_dir)
    try:
        return asyncio.run(entry(settings))
    except CalmTunesException as exc:
        logger.error(f"❌ {type(exc).__name__}: {exc.message}")
        return 1
