"""
Structured Logging with JSON Format
"""

import json
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from ..config.settings import AppConfig

APP_LOGGER_NAME = "finance_console"


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add custom fields from extra
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(config: Optional[AppConfig] = None) -> logging.Logger:
    """Configure the application logger once per process."""
    config = config or AppConfig()
    logger = logging.getLogger(APP_LOGGER_NAME)

    if getattr(logger, '_configured', False):
        return logger

    log_level = logging.DEBUG if config.debug else getattr(logging, config.log_level)
    logger.setLevel(log_level)
    logger.handlers.clear()

    json_formatter = JSONFormatter()

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # File handler with rotation
    file_handler = RotatingFileHandler(
        log_dir / f'{APP_LOGGER_NAME}.log',
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    file_handler.setFormatter(json_formatter)
    file_handler.setLevel(log_level)

    # Error file handler
    error_handler = RotatingFileHandler(
        log_dir / f'{APP_LOGGER_NAME}_errors.log',
        maxBytes=5*1024*1024,  # 5MB
        backupCount=3
    )
    error_handler.setFormatter(json_formatter)
    error_handler.setLevel(logging.ERROR)

    # Console handler: everything in development, warnings and up elsewhere
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(json_formatter)
    console_handler.setLevel(log_level if config.is_development else logging.WARNING)

    logger.addHandler(file_handler)
    logger.addHandler(error_handler)
    logger.addHandler(console_handler)
    logger.propagate = False
    logger._configured = True

    return logger


def log_user_action(action: str, details: Optional[Dict[str, Any]] = None, user_id: Optional[str] = None):
    """Log user actions with context"""
    log_data = {
        'action_type': 'user_action',
        'action': action,
        'user_id': user_id or 'anonymous',
        'details': details or {},
    }
    logging.getLogger(f'{APP_LOGGER_NAME}.audit').info(
        f"User action: {action}", extra={'extra_fields': log_data}
    )


def log_api_call(method: str, endpoint: str, status_code: Optional[int] = None,
                 response_time: Optional[float] = None, error: Optional[str] = None):
    """Log calls to the finance API"""
    log_data = {
        'call_type': 'api_call',
        'method': method,
        'endpoint': endpoint,
        'status_code': status_code,
        'response_time_ms': round(response_time * 1000, 1) if response_time is not None else None,
        'error': error,
    }

    level = logging.ERROR if error else logging.INFO
    message = f"API call {method} {endpoint}"
    if error:
        message += f" - Error: {error}"

    logging.getLogger(f'{APP_LOGGER_NAME}.api').log(level, message, extra={'extra_fields': log_data})
