"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "dealscore-gateway"


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


def log_deal_graded(
    request_id: str,
    grade: str,
    overall_score: float,
    duration_ms: float,
) -> None:
    """Log structured deal grading outcome"""
    logging.info(
        "Deal graded",
        extra={
            "request_id": request_id,
            "step": "deal_graded",
            "grade": grade,
            "overall_score": overall_score,
            "duration_ms": duration_ms,
        },
    )


def log_dealer_graded(
    request_id: str,
    grade: str,
    deal_count: int,
    duration_ms: float,
    dealer_name: str | None = None,
) -> None:
    """Log structured dealer grading outcome"""
    logging.info(
        "Dealer graded",
        extra={
            "request_id": request_id,
            "step": "dealer_graded",
            "dealer_name": dealer_name,
            "grade": grade,
            "deal_count": deal_count,
            "duration_ms": duration_ms,
        },
    )
