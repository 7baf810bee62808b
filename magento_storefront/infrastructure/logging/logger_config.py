"""
Logging Configuration

Console, rotating file and JSON handlers for the storefront bot, structlog
configuration, and a timing context manager for remote calls.
"""

import logging
import logging.handlers
import os
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from magento_storefront.infrastructure.utilities.constants import (
    LoggingSettings,
    PerformanceSettings,
)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.colors.get(record.levelname, self.colors["RESET"])
        # Work on a copy so file handlers sharing the record get plain text
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        record.name = f"\033[94m{record.name}\033[0m"  # Blue
        return super().format(record)


class StorefrontJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with process and request context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id
        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


class PerformanceLogger:
    """Context manager that logs how long an operation took"""

    def __init__(
        self,
        operation_name: str,
        logger: Optional[logging.Logger] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger("performance")
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        extra = {
            "operation": self.operation_name,
            "operation_time": self.duration_ms,
            "success": exc_type is None,
            **self.details,
        }

        if exc_type is not None:
            self.logger.warning(
                "⏱️ FAILED %s after %.1fms: %s",
                self.operation_name,
                self.duration_ms,
                exc_val,
                extra=extra,
            )
        elif self.duration_ms > PerformanceSettings.SLOW_REQUEST_THRESHOLD_MS:
            self.logger.warning(
                "🐢 SLOW %s took %.1fms", self.operation_name, self.duration_ms, extra=extra
            )
        else:
            self.logger.debug(
                "⏱️ %s took %.1fms", self.operation_name, self.duration_ms, extra=extra
            )
        return False


@dataclass
class LoggingConfigOptions:
    """Dataclass for logging configuration options"""

    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_console: bool = True
    enable_file: bool = True
    enable_json: bool = True
    max_file_size: int = LoggingSettings.MAX_LOG_FILE_SIZE
    backup_count: int = LoggingSettings.BACKUP_COUNT


class LoggingConfig:
    """Root logger and structlog configuration"""

    def __init__(self, options: LoggingConfigOptions):
        self.options = options

        if self.options.enable_file or self.options.enable_json:
            Path(self.options.log_dir).mkdir(parents=True, exist_ok=True)

        self._configure_structlog()

    def __repr__(self):
        return f"LoggingConfig(options={self.options})"

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _rotating_handler(self, filename: str, level: int) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            Path(self.options.log_dir) / filename,
            maxBytes=self.options.max_file_size,
            backupCount=self.options.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        return handler

    def setup_logging(self):
        """Attach handlers to the root logger"""
        level = getattr(logging, self.options.log_level.upper(), logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        plain_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        if self.options.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(
                ColoredFormatter(
                    fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        if self.options.enable_file:
            app_handler = self._rotating_handler(LoggingSettings.MAIN_LOG_FILE, level)
            app_handler.setFormatter(plain_formatter)
            root_logger.addHandler(app_handler)

            error_handler = self._rotating_handler(LoggingSettings.ERROR_LOG_FILE, logging.ERROR)
            error_handler.setFormatter(plain_formatter)
            root_logger.addHandler(error_handler)

            perf_handler = self._rotating_handler(
                LoggingSettings.PERFORMANCE_LOG_FILE, logging.DEBUG
            )
            perf_handler.setFormatter(StorefrontJsonFormatter())
            perf_logger = logging.getLogger("performance")
            perf_logger.addHandler(perf_handler)

        if self.options.enable_json:
            json_handler = self._rotating_handler(LoggingSettings.JSON_LOG_FILE, level)
            json_handler.setFormatter(StorefrontJsonFormatter())
            root_logger.addHandler(json_handler)

        self._configure_external_loggers()

        logging.getLogger(__name__).info(
            "✅ Logging configured successfully - Level: %s, Console: %s, File: %s, JSON: %s",
            self.options.log_level,
            self.options.enable_console,
            self.options.enable_file,
            self.options.enable_json,
        )

    def _configure_external_loggers(self):
        """Quiet down chatty third-party loggers"""
        for name in LoggingSettings.NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(options: LoggingConfigOptions) -> LoggingConfig:
    """Setup logging using the LoggingConfig class"""
    config = LoggingConfig(options)
    config.setup_logging()
    return config


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
