"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from invoice_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_query_failure(operation: str, error: Exception) -> None:
    """Log a failed gateway query with the driver error attached"""
    logging.error(
        "Database error",
        extra={
            "step": "query_failed",
            "operation": operation,
            "error_type": type(error).__name__,
            "error": str(error),
        },
    )


def log_rejected_credentials(reason: str) -> None:
    """Log a rejected sign-in attempt without the submitted values"""
    logging.info("Invalid credentials", extra={"step": "authorize", "reason": reason})


def log_unreadable_password_hash(user_id: str, error: Exception) -> None:
    """Log a stored password hash that bcrypt could not parse"""
    logging.warning(
        "Unreadable password hash",
        extra={
            "step": "authorize",
            "reason": "invalid_hash",
            "user_id": user_id,
            "error": str(error),
        },
    )
