"""
Structured logging configuration for incremental offset services.

Usage:
    from src.utils.logging import setup_logging, get_logger

    setup_logging(level="INFO", log_file="/var/log/offsets/app.log")
    logger = get_logger(__name__)
    logger.info("Offset restored", extra={"table_name": "orders", "kind": "integral"})
"""

from .config import configure_from_env, get_logger, setup_logging, shutdown_logging
from .formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_from_env",
    "shutdown_logging",
    "JSONFormatter",
    "ConsoleFormatter",
]
