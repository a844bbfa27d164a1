"""
ThemeFlow Logging Module

Centralized logging for ThemeFlow. A singleton wraps the ``themeflow``
logger; library modules log either through it or through
``logging.getLogger(__name__)``, whose records propagate to it.

Key Features:
- Singleton pattern for consistent logging across the application
- ERROR and above always go to stderr
- Optional timestamped log file per execution (a CLI command, a render batch)
- Microsecond timestamps in log files

Usage:
    from themeflow.logger import logger

    logger.set_execution_context("resolve", "command", ".themeflow/logs", "DEBUG")
    logger.debug("This goes to the log file")
    logger.clear_execution_context()
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

from themeflow.constants import THEMEFLOW_DEFAULT_LOG_DIR, THEMEFLOW_DEFAULT_LOG_LEVEL

LOGGER_NAME = "themeflow"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"


class MicrosecondFormatter(logging.Formatter):
    """Formatter with microsecond timestamps that adds funcName for direct logger calls."""

    LOGGER_METHODS: ClassVar = {"debug", "info", "warning", "error", "critical", "exception"}
    PLAIN_FORMAT: ClassVar = "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"
    FUNC_FORMAT: ClassVar = "%(asctime)s [%(levelname)s] [%(name)s] [%(funcName)s] - %(message)s"

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        ct = datetime.fromtimestamp(record.created)  # noqa: DTZ006
        return ct.strftime(datefmt) if datefmt else ct.isoformat()

    def format(self, record: logging.LogRecord) -> str:
        # funcName is meaningless when the record came through ThemeFlowLogger's wrappers
        if record.funcName in self.LOGGER_METHODS:
            self._style._fmt = self.PLAIN_FORMAT  # noqa: SLF001
        else:
            self._style._fmt = self.FUNC_FORMAT  # noqa: SLF001
        return super().format(record)


class ThemeFlowLogger:
    """
    Singleton logger class for ThemeFlow.

    Manages the ``themeflow`` logger and an optional file handler bound to
    the current execution context.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, "_initialized"):
            return
        self._initialized = True

        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        self._logger.addHandler(console_handler)

        self._execution_context: dict[str, Any] | None = None
        self._file_handler: logging.FileHandler | None = None

    def set_execution_context(
        self,
        execution_name: str,
        execution_type: str,
        log_dir: str | Path | None = None,
        log_level: str = THEMEFLOW_DEFAULT_LOG_LEVEL,
    ) -> None:
        """
        Start logging to a timestamped file for an execution.

        Any previous file handler is closed first.

        Args:
            execution_name: Name of the execution, used in the file name.
            execution_type: Kind of execution ("command", "render", ...).
            log_dir: Directory for log files. Defaults to THEMEFLOW_DEFAULT_LOG_DIR.
            log_level: Logging level name.
        """
        self._close_file_handler()

        log_path = Path(log_dir or THEMEFLOW_DEFAULT_LOG_DIR)
        log_path.mkdir(parents=True, exist_ok=True)

        level = getattr(logging, log_level.upper(), logging.INFO)
        self._logger.setLevel(level)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = log_path / f"{execution_name}_{timestamp}.log"

        self._file_handler = logging.FileHandler(filepath, encoding="utf-8")
        self._file_handler.setLevel(level)
        self._file_handler.setFormatter(MicrosecondFormatter())
        self._logger.addHandler(self._file_handler)

        self._execution_context = {
            "execution_name": execution_name,
            "execution_type": execution_type,
            "log_dir": str(log_path),
            "log_file": str(filepath),
            "start_time": datetime.now(),
        }
        self.info(f"Started {execution_type} execution: {execution_name}")

    def clear_execution_context(self) -> None:
        """Stop file logging and log how long the execution took."""
        if self._execution_context:
            elapsed = datetime.now() - self._execution_context["start_time"]
            self.info(f"Completed execution in {elapsed.total_seconds():.2f} seconds")

        self._close_file_handler()
        self._execution_context = None

    def get_execution_context(self) -> dict[str, Any] | None:
        return self._execution_context

    def _close_file_handler(self) -> None:
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def debug(self, message: str, *args: object, **kwargs) -> None:
        """Log a debug message."""
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: object, **kwargs) -> None:
        """Log an info message."""
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: object, **kwargs) -> None:
        """Log a warning message."""
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: object, **kwargs) -> None:
        """Log an error message."""
        self._logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args: object, **kwargs) -> None:
        """Log an exception with traceback."""
        self._logger.exception(message, *args, **kwargs)


# Create the singleton instance
logger = ThemeFlowLogger()
