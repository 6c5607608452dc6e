"""Observability module for PostDesk.

Provides structured logging, metrics, and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    mail_items_created_total,
    mail_items_received_total,
    mail_items_edited_total,
    mail_browse_total,
    guest_lookups_total,
    store_failures_total,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id, accept_request_id
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "mail_items_created_total",
    "mail_items_received_total",
    "mail_items_edited_total",
    "mail_browse_total",
    "guest_lookups_total",
    "store_failures_total",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    "accept_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
