"""
Huecraft Structured Logging
Structured loguru logging for the library.

Records are bound with `component="huecraft"` and go to whatever handlers
the host application installed. Handlers are only replaced when
`configure_logging()` is called, or once on first use when
HUECRAFT_LOG_CONFIGURE is set.
"""
import sys
from typing import Any, Dict, Optional, TextIO

from loguru import logger

from huecraft.config import config

COMPONENT = "huecraft"

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}"


def configure_logging(level: Optional[str] = None, sink: TextIO = sys.stderr) -> int:
    """
    Replace loguru handlers with a single structured sink.

    Meant for entry points; library code never calls this on its own.

    Returns:
        Handler id of the installed sink
    """
    logger.remove()
    return logger.add(
        sink,
        format=LOG_FORMAT,
        level=level or config.LOG_LEVEL,
        serialize=False  # Set to True for JSON output
    )


class StructuredLogger:
    """Structured logger for Huecraft services."""

    def __init__(self, configure: bool = False):
        if configure:
            configure_logging()

    def _bound(self, extra: Optional[Dict[str, Any]]):
        return logger.bind(component=COMPONENT, **(extra or {}))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with optional extra data."""
        self._bound(extra).info(message)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with optional extra data."""
        self._bound(extra).warning(message)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log error message with optional extra data."""
        self._bound(extra).error(message)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with optional extra data."""
        self._bound(extra).debug(message)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger(configure=config.LOG_CONFIGURE)
    return _logger
