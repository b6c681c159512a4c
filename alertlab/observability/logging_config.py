"""Structured logging configuration for the application."""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "alertlab"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every record with service context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log records."""
        super().add_fields(log_record, record, message_dict)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["environment"] = os.getenv("FLASK_ENV", "production")
        log_record["service"] = SERVICE_NAME


def setup_logging(app=None):
    """
    Configure structured JSON logging for the application.

    Args:
        app: Flask application instance (optional)

    Returns:
        Root logger instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Only replace the handlers installed by a previous call, pytest's
    # caplog handler has to survive repeated app creation.
    for handler in logger.handlers[:]:
        if getattr(handler, "_alertlab_json", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler._alertlab_json = True

    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    if app:
        # Let records from app.logger bubble up to the root JSON handler.
        app.logger.handlers = []
        app.logger.propagate = True
        app.logger.setLevel(log_level)
        app.logger.info(
            "Structured logging initialized",
            extra={"log_level": log_level, "format": "json"},
        )

    return logger

