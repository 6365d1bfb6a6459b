"""
Design (event_log.py)
- Purpose: Append one timestamped line per registry event ("<ISO-8601 UTC> | <message>").
- Inputs: Log file path (from Settings).
- Outputs: None.
- Side effects: Creates the log directory/file and appends to it via a logging.FileHandler.
- Thread-safety: logging handlers serialize writes internally.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "device_inventory.events"


class UtcIsoFormatter(logging.Formatter):
    """Formats records as '<ISO-8601 UTC timestamp> | <message>'."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.formatTime(record)} | {record.getMessage()}"


class EventLog:
    """
    Design (EventLog)
    - Purpose: The registry's logging port. Wraps a dedicated logger with one file handler.
    - State:
        _logger: child logger named after the log file, propagation disabled
        _handler: FileHandler, or NullHandler when the file cannot be opened
    """

    def __init__(self, log_path: Path, logger: logging.Logger | None = None) -> None:
        base = logger or logging.getLogger(LOGGER_NAME)
        self._logger = base.getChild(str(log_path.resolve()).replace(".", "_"))
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._handler = self._open_handler(log_path)
        self._logger.addHandler(self._handler)

    @staticmethod
    def _open_handler(log_path: Path) -> logging.Handler:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            # Unwritable location: events are dropped, the app keeps running.
            return logging.NullHandler()
        handler.setFormatter(UtcIsoFormatter())
        return handler

    def log(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def close(self) -> None:
        """Detach and close the handler (call on exit, and in tests before reading the file)."""
        self._logger.removeHandler(self._handler)
        self._handler.close()
