"""
Logging Configuration

Optional structured logging setup for applications embedding homhash.
The library itself only creates module loggers and never configures
handlers on import.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from .config import HomHashSettings, get_settings

SERVICE_NAME = "homhash"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter with timestamp, service and level fields."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['service'] = SERVICE_NAME

        if not log_record.get('level'):
            log_record['level'] = record.levelname


def setup_logging(settings: Optional[HomHashSettings] = None, stream=None) -> logging.Handler:
    """
    Configure root logging according to settings.

    Args:
        settings: Settings to use (defaults to the global settings)
        stream: Output stream for the handler (defaults to stdout)

    Returns:
        logging.Handler: The installed handler
    """
    settings = settings or get_settings()

    # Clear existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)

    if settings.log_format.lower() == 'json':
        formatter = CustomJsonFormatter(
            fmt='%(timestamp)s %(level)s %(name)s %(message)s'
        )
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - level: {settings.log_level}, format: {settings.log_format}")
    return console_handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
