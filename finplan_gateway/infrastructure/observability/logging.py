"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from finplan_gateway.config import settings


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


def log_simulation(
    request_id: str,
    strategy: str,
    status: str,
    debt_count: int,
    periods_elapsed: int,
    duration_ms: float,
) -> None:
    """Log structured simulation outcome"""
    logging.info(
        "Debt simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulation_complete",
            "strategy": strategy,
            "simulation_status": status,
            "debt_count": debt_count,
            "periods_elapsed": periods_elapsed,
            "duration_ms": duration_ms,
        },
    )


def log_estimate(
    request_id: str,
    reached: bool,
    time_to_target: float | None,
    duration_ms: float,
) -> None:
    """Log structured savings estimate outcome"""
    logging.info(
        "Savings estimate completed",
        extra={
            "request_id": request_id,
            "step": "estimate_complete",
            "outcome": "reached" if reached else "unreachable",
            "time_to_target": time_to_target,
            "duration_ms": duration_ms,
        },
    )
