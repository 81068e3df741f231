"""Console log formatting: colored level names and shortened logger names."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Any

PACKAGE_PREFIX = "baguette_bot."


class ColoredFormatter(logging.Formatter):
    """Logging formatter that colors the levelname and trims package logger names.

    ``baguette_bot.application.services.playback_session`` is shown as
    ``services.playback_session`` when ``short_names`` is on. Colors are
    disabled when the ``NO_COLOR`` environment variable is set or when the
    output stream is not a TTY (e.g. redirected to a file).
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",     # cyan
        logging.INFO: "\033[32m",      # green
        logging.WARNING: "\033[33m",   # yellow
        logging.ERROR: "\033[31m",     # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Any = "%",
        *,
        stream: IO[str] | None = None,
        short_names: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt, style)
        self._stream = stream
        self._short_names = short_names

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    @staticmethod
    def shorten_name(name: str) -> str:
        if not name.startswith(PACKAGE_PREFIX):
            return name
        parts = name.split(".")
        return ".".join(parts[-2:])

    def format(self, record: logging.LogRecord) -> str:
        use_color = self._use_color()
        if not use_color and not self._short_names:
            return super().format(record)

        record = logging.makeLogRecord(record.__dict__)
        if self._short_names:
            record.name = self.shorten_name(record.name)
        if use_color:
            color = self.COLORS.get(record.levelno, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"
            record.name = f"{self.DIM}{record.name}{self.RESET}"
        return super().format(record)
