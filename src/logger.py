"""
Logging Setup Module.

Configures the application logger used across the harvester. Messages may be
plain strings or dictionaries; dictionaries are merged into the JSON record
by python-json-logger so that structured fields (repository, cursor, error,
...) stay searchable in the log files.
"""

import logging
import os
from logging import Logger
from logging.handlers import TimedRotatingFileHandler

from pythonjsonlogger import jsonlogger

JSON_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def json_formatter() -> logging.Formatter:
    """Formatter writing each record as one JSON line."""
    return jsonlogger.JsonFormatter(JSON_LOG_FORMAT)


class ConsoleFormatter(logging.Formatter):
    """Human readable formatter for development runs."""

    def __init__(self):
        super().__init__(
            "[%(asctime)s][%(levelname)s][%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            fields = dict(record.msg)
            message = fields.pop("message", "")
            extras = " ".join(f"{key}={value}" for key, value in fields.items())
            record = logging.makeLogRecord(
                {**record.__dict__, "msg": f"{message} {extras}".strip(), "args": ()}
            )
        return super().format(record)


class LogManager:
    """
    Builds the application logger.

    Attributes:
        logger (Logger): Configured logger instance.
    """

    def __init__(
        self,
        app_name: str,
        log_dir: str,
        development: bool = False,
        level: int = logging.INFO,
    ):
        """
        Args:
            app_name (str): Logger name, also used as the log file name.
            log_dir (str): Directory where log files are written.
            development (bool): Use the readable console format instead of JSON.
            level (int): Logging level.
        """
        self.app_name = app_name
        self.log_dir = log_dir
        self.development = development
        self.level = level
        self.logger = self._build_logger()

    def _build_logger(self) -> Logger:
        logger = logging.getLogger(self.app_name)
        logger.setLevel(self.level)
        logger.propagate = False

        # Module may be imported more than once (tests, reload)
        if logger.handlers:
            return logger

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ConsoleFormatter() if self.development else json_formatter()
        )
        logger.addHandler(console_handler)

        os.makedirs(self.log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            os.path.join(self.log_dir, f"{self.app_name}.log"),
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter())
        logger.addHandler(file_handler)

        return logger
