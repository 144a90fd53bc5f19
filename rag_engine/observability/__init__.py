"""
Observability module.

Provides structured logging, correlation ID tracking and request middleware.
"""

from rag_engine.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from rag_engine.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
