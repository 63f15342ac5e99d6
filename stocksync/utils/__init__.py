"""Utility modules."""

from stocksync.utils.logger import get_logger, log_view_step
from stocksync.utils.tracing import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "get_logger",
    "log_view_step",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
