"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger

from stock_margins.config import settings
from stock_margins.domain.models import VehicleMarginResult


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


def log_margin_calculation(
    request_id: str,
    dealer_id: str | None,
    result: VehicleMarginResult,
    duration_ms: float,
) -> None:
    """Log structured calculation outcome for analysis"""
    logging.info(
        "Margins calculated",
        extra={
            "request_id": request_id,
            "dealer_id": dealer_id,
            "vehicle_id": result.vehicle_id,
            "step": "margins_calculated",
            "profit_category": result.profit_category.value,
            "net_profit": str(result.net_profit),
            "net_margin_percent": result.net_margin_percent,
            "days_in_stock": result.days_in_stock,
            "duration_ms": duration_ms,
        },
    )


def log_margin_rejected(request_id: str, vehicle_id: str | None, errors: List[str]) -> None:
    """Log validation failure with every reason"""
    logging.warning(
        "Margin data rejected",
        extra={
            "request_id": request_id,
            "vehicle_id": vehicle_id,
            "step": "margins_rejected",
            "errors": errors,
        },
    )
