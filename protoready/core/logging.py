# protoready/core/logging.py
"""
Structured JSON logging

Every record carries the service name and environment. Request context
(request_id, tool_type) is passed through ``extra`` and lands as top-level
JSON keys.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from protoready.core.config import settings

ROOT_LOGGER = "protoready"
LOG_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"


class AssessmentJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping service metadata onto each record"""

    def __init__(self, *args, service: str = settings.PROJECT_NAME, environment: str = settings.ENVIRONMENT, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service
        self.environment = environment

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        # Fields named in the format string arrive as None when unset
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self.service
        log_record["environment"] = self.environment

        if record.levelno >= logging.ERROR and record.exc_info:
            log_record["error_type"] = record.exc_info[0].__name__


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """Attach a single JSON handler to the package logger"""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(AssessmentJsonFormatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the package logger, e.g. ``get_logger("scanner")``"""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


logger = setup_logging(settings.LOG_LEVEL)
