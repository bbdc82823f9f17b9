"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from astha_engine.config import settings


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


def log_leaderboard_query(request_id: str, period: str, channel: str, user_count: int, duration_ms: float) -> None:
    logging.info(
        "Leaderboard computed",
        extra={
            "request_id": request_id,
            "step": "leaderboard",
            "period": period,
            "channel": channel,
            "user_count": user_count,
            "duration_ms": duration_ms,
        },
    )


def log_projection(request_id: str, debt_count: int, months: int, payoff_month: int | None) -> None:
    """Log projection outcome; payoff_month is None when the horizon ends first"""
    logging.info(
        "Payoff projection completed",
        extra={
            "request_id": request_id,
            "step": "projection",
            "debt_count": debt_count,
            "months_simulated": months,
            "payoff_month": payoff_month,
        },
    )


def log_mandate_transition(request_id: str, kind: str, record_id: str, operation: str, state: str) -> None:
    logging.info(
        "Mandate updated",
        extra={
            "request_id": request_id,
            "step": "mandate_" + operation,
            "record_kind": kind,
            "record_id": record_id,
            "mandate_state": state,
        },
    )
