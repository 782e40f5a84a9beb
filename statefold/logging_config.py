"""
Structured logging configuration for statefold tooling.

Provides JSON-formatted logs with run_id support for correlating every
event of one replay. The interpreter core itself never logs.

Environment Variables:
    STATEFOLD_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    STATEFOLD_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from statefold.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, run_id="light-001")
    logger.info("Replaying events", extra={"events": 5})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override the environment:
    - STATEFOLD_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - STATEFOLD_LOG_FORMAT: json, text (default: json)
    """
    log_level = (level or os.getenv("STATEFOLD_LOG_LEVEL", "INFO")).upper()
    log_format = (log_format or os.getenv("STATEFOLD_LOG_FORMAT", "json")).lower()
    resolved = LEVELS.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.addFilter(RunIdFilter())

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(run_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [run_id=%(run_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, run_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional run_id for correlation.

    Args:
        name: Logger name (typically __name__)
        run_id: Identifier shared by all logs of one run

    Returns:
        LoggerAdapter with run_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"run_id": run_id or "N/A"})


class RunIdFilter(logging.Filter):
    """
    Logging filter that adds run_id to all log records.

    Ensures all logs have a run_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = "N/A"  # type: ignore
        return True
