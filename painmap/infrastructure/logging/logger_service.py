# painmap/infrastructure/logging/logger_service.py
"""
Implementation of the logger service using Python's built-in logging module.
"""
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Union

from painmap.domain.services.i_logger_service import ILoggerService

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_log_level(level: Union[int, str], default: int = logging.INFO) -> int:
    """Convert a level name such as "DEBUG" from the config file into a logging constant."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


class ConsoleLoggerService(ILoggerService):
    """Logs to stdout through a named standard library logger."""

    def __init__(self, level: Union[int, str] = logging.INFO, name: str = "PainMap"):
        """
        Initialize the logger service.

        Args:
            level: Initial log level, as a logging constant or level name
            name: Logger name
        """
        self.logger = logging.getLogger(name)
        level = parse_log_level(level)
        self.set_level(level)

        # Don't add handlers if they already exist
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(self._with_context(message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(self._with_context(message, kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(self._with_context(message, kwargs))

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(self._with_context(message, kwargs))

    def critical(self, message: str, **kwargs) -> None:
        self.logger.critical(self._with_context(message, kwargs))

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)

    def _with_context(self, message: str, extra: Dict[str, Any]) -> str:
        """Append ``[key=value ...]`` for the context kwargs, if any."""
        if not extra:
            return message
        formatted = " ".join(f"{key}={value}" for key, value in extra.items())
        return f"{message} [{formatted}]"


class FileLoggerService(ConsoleLoggerService):
    """
    Console logger that also writes to a size-rotated file in log_dir.

    The file is named after the logger and the start date, e.g.
    ``logs/PainMap_2024-05-01.log``.
    """

    def __init__(self, level: Union[int, str] = logging.INFO, name: str = "PainMap",
                 log_dir: str = "logs", max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5):
        super().__init__(level, name)

        os.makedirs(log_dir, exist_ok=True)

        current_date = datetime.now().strftime("%Y-%m-%d")
        self.log_file = os.path.join(log_dir, f"{name}_{current_date}.log")

        already_attached = any(
            isinstance(handler, RotatingFileHandler)
            and os.path.abspath(handler.baseFilename) == os.path.abspath(self.log_file)
            for handler in self.logger.handlers
        )
        if not already_attached:
            file_handler = RotatingFileHandler(self.log_file, maxBytes=max_bytes, backupCount=backup_count)
            file_handler.setLevel(self.logger.level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(file_handler)
