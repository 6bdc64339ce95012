"""Structured JSON logging for the projection service"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from finsim_engine.config import settings

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"

# Chatty third-party loggers capped at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines stamped with the record's own UTC time and level"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname


def build_formatter() -> CustomJsonFormatter:
    return CustomJsonFormatter(LOG_FORMAT, static_fields={"service": settings.service_name})


def setup_logging(level: Optional[str] = None) -> None:
    """Route every log record to stdout as JSON, at settings.log_level unless overridden"""
    root = logging.getLogger()
    root.setLevel(level or settings.log_level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_projection(
    request_id: str,
    kind: str,
    horizon_months: int,
    final_net_worth: float,
    duration_ms: float,
) -> None:
    """Log structured projection outcome for analysis"""
    logging.info(
        "Projection completed",
        extra={
            "request_id": request_id,
            "step": f"{kind}_complete",
            "horizon_months": horizon_months,
            "final_net_worth": round(final_net_worth, 2),
            "duration_ms": duration_ms,
        },
    )
