"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from wellness_gateway.config import settings


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
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    request_id: str,
    endpoint: str,
    transaction_count: int,
    account_count: int,
    duration_ms: float,
    score: Optional[int] = None,
) -> None:
    """Log structured analysis outcome"""
    extra: Dict[str, Any] = {
        "request_id": request_id,
        "step": "analysis_complete",
        "endpoint": endpoint,
        "transaction_count": transaction_count,
        "account_count": account_count,
        "duration_ms": duration_ms,
    }
    if score is not None:
        extra["score"] = score
    logging.info("Analysis completed", extra=extra)
