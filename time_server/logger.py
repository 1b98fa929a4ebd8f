"""
Logging capability injected into the time service.

The service only sees `IServiceLogger.log(level, message, data)`. The default
implementation forwards to the standard `logging` module; the stdio entry
point adds a file handler because stdout carries the MCP protocol.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

LOGGER_NAME = "time_server"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


class IServiceLogger(ABC):
    @abstractmethod
    def log(self, level: str, message: str, data: Optional[Any] = None) -> None:
        pass

    def debug(self, message: str, data: Optional[Any] = None) -> None:
        self.log("DEBUG", message, data)

    def info(self, message: str, data: Optional[Any] = None) -> None:
        self.log("INFO", message, data)

    def error(self, message: str, data: Optional[Any] = None) -> None:
        self.log("ERROR", message, data)


class StdlibServiceLogger(IServiceLogger):
    """Writes structured entries to a `logging.Logger`."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def log(self, level: str, message: str, data: Optional[Any] = None) -> None:
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO
        if data is not None:
            message = f"{message}\nData: {json.dumps(data, indent=2, default=str)}"
        self.logger.log(numeric_level, message)


def setup_file_logging(log_dir: Path, level: str = "INFO") -> Path:
    """Append time server logs to <log_dir>/logs.txt and return that path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "logs.txt"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file.resolve()
               for h in logger.handlers):
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return log_file
