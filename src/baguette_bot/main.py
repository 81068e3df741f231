#!/usr/bin/env python3
"""Process entry point: configure logging, check prerequisites, run the bot."""

from __future__ import annotations

import json
import logging
import logging.config
import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from baguette_bot.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from baguette_bot.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"
_FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", config_path: Path | None = None) -> None:
    """Apply ``logging_config.json``, or a plain console format if it is unusable."""
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)
    path = config_path or _LOGGING_CONFIG_PATH

    try:
        with open(path) as f:
            logging.config.dictConfig(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(
            level=resolved_level, format=_FALLBACK_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
        )
        logging.warning("Could not load %s, falling back to basic config", path)

    logging.getLogger().setLevel(resolved_level)


def ffmpeg_available() -> bool:
    return shutil.which("ffmpeg") is not None


def log_startup(settings: Settings) -> None:
    playback = settings.playback
    logger.info(
        LogTemplates.BOT_STARTING,
        settings.environment,
        playback.fetch_attempts,
        playback.fetch_retry_delay_seconds,
        playback.max_queue_size or "none",
    )
    if not ffmpeg_available():
        logger.warning(LogTemplates.FFMPEG_MISSING)


def main() -> int:
    from baguette_bot.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    token = settings.discord.token.get_secret_value()
    if not token:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    log_startup(settings)

    from baguette_bot.config.container import create_container
    from baguette_bot.infrastructure.discord.bot import create_bot

    bot = create_bot(create_container(settings), settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1
    else:
        logger.info(LogTemplates.BOT_STOPPED)
    return 0


def cli() -> None:
    """Console script entry point (``baguette-bot``)."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
