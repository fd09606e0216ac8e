import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import structlog


def setup_logging(
    log_level: str = "INFO", log_to_file: bool = True, logs_dir: Path = Path("logs")
) -> None:
    """Set up logging configuration for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        logs_dir: Directory receiving the rotating log files
    """

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            # JSON formatting for file logs
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_dir.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)

        # Error-only log file
        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s - %(exc_info)s"
            )
        )
        root_logger.addHandler(error_handler)


def get_export_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger for share image export.

    Args:
        name: Logger name (defaults to "image_export")
    """
    return structlog.get_logger(name or "image_export")


def log_export_error(
    error: Exception, context: Dict[str, Any], logger: structlog.BoundLogger = None
) -> None:
    """Log a share image export error with its context."""
    if logger is None:
        logger = get_export_logger()

    logger.error(
        "Share image export failed",
        error_type=type(error).__name__,
        error_message=str(error),
        timestamp=datetime.now().isoformat(),
        **context,
    )


def log_export_success(
    processing_time: float,
    details: Dict[str, Any],
    logger: structlog.BoundLogger = None,
) -> None:
    """Log a finished share image export with its timing."""
    if logger is None:
        logger = get_export_logger()

    logger.info(
        "Share image export completed",
        processing_time_seconds=processing_time,
        **details,
    )


class ExportLogContext:
    """Context manager timing one export operation and logging its outcome."""

    def __init__(self, operation: str, **context):
        self.operation = operation
        self.context = context
        self.logger = get_export_logger()
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"{self.operation} - START", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        processing_time = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            log_export_error(
                exc_val,
                {
                    "operation": self.operation,
                    "processing_time_seconds": processing_time,
                    **self.context,
                },
                self.logger,
            )
        else:
            log_export_success(
                processing_time,
                {"operation": self.operation, **self.context},
                self.logger,
            )
