"""Logging utility for mail-tui"""

import json
import logging
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .paths import LOGS_DIR

ROOT_LOGGER_NAME = "mail_tui"


## Custom JSON Formatter


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        return json.dumps(log_entry, default=str)


class LogManager:
    """Manages logging configuration and provides logger instances.

    Everything below the ``mail_tui`` logger is written as JSON lines to a
    rotating file. The rich console handler is optional because a full-screen
    TUI owns the terminal while it runs.
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        console: bool = False,
        max_bytes: int = 5_242_880,
        backup_count: int = 5,
    ):
        self.log_level = getattr(logging, log_level.upper(), logging.INFO)
        self.log_dir = Path(log_dir) if log_dir else LOGS_DIR
        self.console = console
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.root_logger.setLevel(logging.DEBUG)
        self.root_logger.propagate = False
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup console and file handlers."""

        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)
            handler.close()

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            app_handler = RotatingFileHandler(
                self.log_dir / "mail-tui.log",
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8",
            )
        except OSError:
            # Unwritable log directory: keep running without a file log.
            app_handler = logging.NullHandler()

        app_handler.setLevel(self.log_level)
        app_handler.setFormatter(JSONFormatter())
        self.root_logger.addHandler(app_handler)

        if self.console:
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
            self.root_logger.addHandler(console_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a logger under the mail_tui root."""

        if name and name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
            name = f"{ROOT_LOGGER_NAME}.{name}"

        return logging.getLogger(name) if name else self.root_logger


def async_log_call(func):
    """Async decorator to log function calls and their duration."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        func_name = f"{func.__module__}.{func.__qualname__}"
        logger.debug(f"-> Entering {func_name} (async)")
        start_time = datetime.now()

        try:
            result = await func(*args, **kwargs)
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Exiting {func_name} (Duration: {duration:.3f}s)")
            return result

        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Error in {func_name} after {duration:.3f}s: {e}")
            raise

    return wrapper


_log_manager: Optional[LogManager] = None


def init_logging(log_level: str = "INFO", **kwargs) -> LogManager:
    """Initialize logging system and return LogManager instance."""

    global _log_manager
    _log_manager = LogManager(log_level, **kwargs)

    return _log_manager


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Loggers are plain children of ``mail_tui``; handlers only exist once
    ``init_logging`` has run, so importing a module never touches the disk.
    """

    if _log_manager is not None:
        return _log_manager.get_logger(name)

    if name and name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name or ROOT_LOGGER_NAME)
