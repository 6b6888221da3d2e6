"""Logging infrastructure for PropUnit backend."""

from .file_logger import FileLogger, configure_app_loggers, setup_file_logging
from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import (
    RequestIdMiddleware,
    TransactionIdFilter,
    get_transaction_id,
    set_transaction_id,
)

__all__ = [
    "FileLogger",
    "setup_file_logging",
    "configure_app_loggers",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
]
