"""
Logging setup for ecrpush.

Provides human-readable console logs by default and JSON structured logs
when LOG_FORMAT=json, for CI systems that ingest structured output.
"""

import logging
import os
import sys


def setup_logger(name: str = "ecrpush") -> logging.Logger:
    """
    Configure the package logger.

    Parameters
    ----------
    name : str, optional
        Logger name, by default "ecrpush" so every ``ecrpush.*`` module
        logger propagates to it.

    Returns
    -------
    logging.Logger
        Configured logger instance.

    Environment Variables
    ---------------------
    LOG_LEVEL : str
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    LOG_FORMAT : str
        "json" for JSON lines, anything else for plain text (default: text)
    """
    logger = logging.getLogger(name)

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Remove existing handlers to avoid duplicates if called multiple times
    logger.handlers.clear()

    # stderr keeps log records out of the streamed docker output on stdout
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    if os.getenv("LOG_FORMAT", "text").lower() == "json":
        formatter = _create_json_formatter()
    else:
        formatter = _create_text_formatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def _create_json_formatter() -> logging.Formatter:
    """Create a JSON formatter with ``severity`` in place of ``levelname``."""
    from pythonjsonlogger import jsonlogger

    class SeverityJsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super().add_fields(log_record, record, message_dict)
            if "levelname" in log_record:
                log_record["severity"] = log_record.pop("levelname")

    return SeverityJsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _create_text_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
