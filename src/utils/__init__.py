"""Utility modules."""

from src.utils.logging import LogContext, get_logger, setup_logging

__all__ = [
    "get_logger",
    "LogContext",
    "setup_logging",
]
