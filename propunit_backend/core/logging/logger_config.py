"""
Central logging configuration for PropUnit.
Provides setup functions and logger management.
"""

import logging

from .file_logger import FileLogger, configure_app_loggers, setup_file_logging
from .middleware import TransactionIdFilter
from .structured_logger import setup_structured_logging


class LoggingConfig:
    """Central logging configuration manager."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self.transaction_filter: TransactionIdFilter | None = None
        self._is_configured = False

    @property
    def is_configured(self) -> bool:
        return self._is_configured

    def setup(
        self,
        log_to_file: bool = True,
        log_level: str = "INFO",
        log_file_path: str = "logs/app.log",
        use_json_format: bool = True,
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
    ) -> logging.Logger:
        """
        Set up comprehensive logging configuration.

        Args:
            log_to_file: Whether to enable file logging
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_file_path: Path to the log file
            use_json_format: Whether to use JSON formatting
            max_bytes: Maximum file size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured main logger instance
        """
        if self._is_configured:
            return get_logger()

        self.transaction_filter = TransactionIdFilter()

        if log_to_file:
            self.file_logger = setup_file_logging(
                enabled=True,
                log_file_path=log_file_path,
                log_level=log_level,
                use_json_format=use_json_format,
                max_bytes=max_bytes,
                backup_count=backup_count,
            )

        if self.file_logger:
            queue_handler = self.file_logger.get_queue_handler()
            queue_handler.addFilter(self.transaction_filter)
            configure_app_loggers(queue_handler, log_level)
        else:
            logger = setup_structured_logging(log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(self.transaction_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        """Shutdown logging gracefully."""
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


# Global logging configuration instance
_logging_config = LoggingConfig()


def setup_logging(
    log_to_file: bool = False,
    log_level: str = "INFO",
    log_file_path: str = "logs/app.log",
    use_json_format: bool = True,
    max_bytes: int = 50 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Set up logging once per process using the given settings."""
    return _logging_config.setup(
        log_to_file=log_to_file,
        log_level=log_level,
        log_file_path=log_file_path,
        use_json_format=use_json_format,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional logger name (will be prefixed with app name)

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"propunit_backend.{name}")
    return logging.getLogger("propunit_backend")


def shutdown_logging() -> None:
    """Shutdown logging gracefully."""
    _logging_config.shutdown()
