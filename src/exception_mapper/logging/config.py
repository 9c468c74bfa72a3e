import os
import logging
import logging.handlers
from typing import Optional
from pathlib import Path
import json
from datetime import datetime, timezone

class LogConfig:
    """Logging configuration for exception handler diagnostics."""

    def __init__(
        self,
        log_level: str = 'INFO',
        log_file: Optional[str] = None,
        log_format: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        json_logging: bool = False,
        logger_name: Optional[str] = None
    ):
        """
        Initialize the logging configuration.

        Args:
            log_level: Logging level
            log_file: Optional log file path
            log_format: Optional log format string
            max_bytes: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
            json_logging: Whether to use JSON logging format
            logger_name: Logger to configure, the root logger if None
        """
        self.log_level = getattr(logging, log_level.upper())
        self.log_file = log_file
        self.log_format = log_format or (
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.json_logging = json_logging
        self.logger_name = logger_name

    @classmethod
    def from_config(cls, config) -> 'LogConfig':
        """Build from a HandlerConfiguration."""
        return cls(
            log_level=config.log_level,
            log_file=config.log_file,
            json_logging=config.json_logging,
            logger_name=config.logger_name
        )

    def configure(self) -> logging.Logger:
        """
        Configure logging with the specified settings.

        Returns:
            The configured logger
        """
        if self.json_logging:
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(self.log_format)

        handlers = []

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(self.log_level)
        handlers.append(console_handler)

        if self.log_file:
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                Path(log_dir).mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(self.log_level)
            handlers.append(file_handler)

        target_logger = logging.getLogger(self.logger_name)
        target_logger.setLevel(self.log_level)

        # Remove existing handlers
        for handler in target_logger.handlers[:]:
            target_logger.removeHandler(handler)
            handler.close()

        for handler in handlers:
            target_logger.addHandler(handler)

        return target_logger

class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


def configure_logging(config) -> logging.Logger:
    """Configure logging from a HandlerConfiguration."""
    return LogConfig.from_config(config).configure()
