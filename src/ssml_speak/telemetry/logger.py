"""Structured logging utilities.

``get_logger`` is the diagnostic stderr logger. :class:`SessionLogger` is
the optional per-day session log that mirrors messages to the console.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..errors import LogWriteError

_LOGGER: logging.Logger | None = None

SESSION_LOGGER_NAME = "ssml_speak.session"
SEPARATOR = "-" * 60
TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    logger = get_logger()
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger("ssml_speak")
    logger.setLevel(logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    _LOGGER = logger
    return logger


def timestamp(moment: Optional[datetime] = None) -> str:
    """Format ``dd.MM.yyyy HH:mm:ss.fff``."""
    moment = moment or datetime.now()
    return moment.strftime(TIMESTAMP_FORMAT) + f".{moment.microsecond // 1000:03d}"


def log_path_for(log_dir: Path, pattern: str, day: Optional[date] = None) -> Path:
    """Daily log file path; same-day runs share (and append to) one file."""
    day = day or date.today()
    return Path(log_dir) / day.strftime(pattern)


class SessionFormatter(logging.Formatter):
    """Prefix every line with the session timestamp, except raw records."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s | %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return timestamp(datetime.fromtimestamp(record.created))

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "raw", False):
            return record.getMessage()
        return super().format(record)


class SessionFileHandler(logging.FileHandler):
    """Append-only UTF-8 handler that reports a write failure once."""

    def __init__(self, path: Path, on_error) -> None:
        super().__init__(path, mode="a", encoding="utf-8")
        self._on_error = on_error
        self.failed = False

    def emit(self, record: logging.LogRecord) -> None:
        if self.failed:
            return
        super().emit(record)

    def handleError(self, record: logging.LogRecord) -> None:
        if not self.failed:
            self.failed = True
            self._on_error(record)


class SessionLogger:
    """Optional session log mirrored to the console.

    When disabled, :meth:`write` still prints to the console if asked to,
    but nothing reaches the file.
    """

    def __init__(
        self,
        console: Console,
        enabled: bool = False,
        log_dir: Path | None = None,
        pattern: str = "ssml-speak_%Y-%m-%d.log",
        day: Optional[date] = None,
    ) -> None:
        self.console = console
        self.enabled = enabled
        self.path: Optional[Path] = (
            log_path_for(log_dir or Path.cwd(), pattern, day) if enabled else None
        )
        self._logger = logging.getLogger(SESSION_LOGGER_NAME)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._handler: Optional[SessionFileHandler] = None

    @classmethod
    def from_settings(cls, settings, console: Console, enabled: bool) -> SessionLogger:
        return cls(
            console=console,
            enabled=enabled,
            log_dir=settings.LOG_DIR,
            pattern=settings.LOG_FILE_PATTERN,
        )

    @property
    def active(self) -> bool:
        return self._handler is not None and not self._handler.failed

    def start(self) -> None:
        """Open the day's file and append the separator and starting banner."""
        if not self.enabled or self._handler is not None:
            return
        assert self.path is not None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handler = SessionFileHandler(self.path, on_error=self._report_failure)
        except OSError as exc:
            self._warn(LogWriteError(f"cannot open {self.path}: {exc}"))
            self.enabled = False
            return
        self._handler.setFormatter(SessionFormatter())
        self._logger.addHandler(self._handler)
        self._logger.info(SEPARATOR, extra={"raw": True})
        self._logger.info("Starting speech session")

    def write(self, message: str, also_to_console: bool = False, style: str | None = None) -> None:
        if also_to_console:
            self.console.print(message, style=style, markup=False, highlight=False)
        if self.active:
            self._logger.info(message)

    def close(self) -> None:
        if self._handler is None:
            return
        handler, self._handler = self._handler, None
        self._logger.removeHandler(handler)
        try:
            handler.close()
        except (OSError, ValueError) as exc:
            if not handler.failed:
                self._warn(LogWriteError(f"cannot close {self.path}: {exc}"))

    def _report_failure(self, record: logging.LogRecord) -> None:
        self._warn(LogWriteError(f"cannot write to {self.path}"))

    def _warn(self, error: LogWriteError) -> None:
        self.console.print(f"Logging disabled: {error}", style="yellow", markup=False, highlight=False)
