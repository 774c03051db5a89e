"""
Structured logging configuration for replayflow.

Provides JSON-formatted logs with a subject field for correlating all
log lines produced while processing events of one conversation.

Environment Variables:
    REPLAYFLOW_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    REPLAYFLOW_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from replayflow.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, subject="chat-12345")
    logger.info("Handling event")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Explicit arguments win over the environment:
    - REPLAYFLOW_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - REPLAYFLOW_LOG_FORMAT: json, text (default: json)
    """
    log_level = (level or os.getenv("REPLAYFLOW_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("REPLAYFLOW_LOG_FORMAT", "json")).lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    resolved = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.addFilter(SubjectFilter())

    if fmt == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(subject)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [subject=%(subject)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, subject: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with an optional subject for correlation.

    Example:
        logger = get_logger(__name__, subject="chat-12345")
        logger.info("Flow suspended")
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Flow suspended", "subject": "chat-12345"}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"subject": subject or "N/A"})


class SubjectFilter(logging.Filter):
    """
    Logging filter that adds subject to all log records.

    Ensures all records have a subject field, even if not logged via get_logger().
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "subject"):
            record.subject = "N/A"  # type: ignore
        return True
