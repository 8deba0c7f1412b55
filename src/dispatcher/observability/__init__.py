"""Observability layer for the model dispatcher.

This module provides structured logging, request tracing via correlation IDs,
and redaction of credentials before they reach the logs.

Usage:
    from dispatcher.observability import get_logger

    logger = get_logger(__name__)
    logger.info("model.query.started", model=model_name)
"""

from dispatcher.observability.context import (
    correlation_id_var,
    get_correlation_id,
    set_correlation_id,
)
from dispatcher.observability.logger import configure_logging, get_logger
from dispatcher.observability.middleware import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
)
from dispatcher.observability.sanitizer import sanitize

__all__ = [
    # Context
    "correlation_id_var",
    "get_correlation_id",
    "set_correlation_id",
    # Logger
    "configure_logging",
    "get_logger",
    # Middleware
    "CorrelationIDMiddleware",
    "RequestLoggingMiddleware",
    # Sanitizer
    "sanitize",
]
