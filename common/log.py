import os
import logging
import json
import traceback
from datetime import datetime, timezone
import sys
from typing import Optional

LEVEL_MAP = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL
}

# GLOBAL_LOG_LEVEL overrides the default of INFO
log_level = LEVEL_MAP.get(os.environ.get('GLOBAL_LOG_LEVEL', 'info').lower(), logging.INFO)

# Attributes every LogRecord carries; anything else was passed as structured data
STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'getMessage', 'extra', 'message', 'asctime'
})


class JsonFormatter(logging.Formatter):
    """Formatter that emits one JSON object per record for log aggregation"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        extra_data = {k: v for k, v in record.__dict__.items() if k not in STANDARD_ATTRS}
        if extra_data:
            log_entry['extra'] = extra_data

        return json.dumps(log_entry, default=str)

use_json_logging = os.environ.get('USE_JSON_LOGGING', 'false').lower() == 'true'

def configure_root_logger():
    """Configure the root logger with a single stdout handler"""
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if use_json_logging:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

configure_root_logger()

def get_log_level() -> int:
    """Get the current log level"""
    return log_level

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name"""
    logger = logging.getLogger(name)
    logger.setLevel(get_log_level())
    return logger

def log_structured(logger: logging.Logger, level: int, message: str, **kwargs) -> None:
    """Log a message with structured data

    Args:
        logger: The logger instance to use
        level: The log level (e.g., logging.INFO)
        message: The log message
        **kwargs: Additional structured data to include in the log
    """
    if not logger.isEnabledFor(level):
        return

    exc_info = kwargs.pop('exc_info', None)
    safe_kwargs = {k: v for k, v in kwargs.items() if k not in STANDARD_ATTRS}

    # Plain-text output carries the structured data inline
    if not use_json_logging and safe_kwargs:
        extra_info = ', '.join(f"{k}={v}" for k, v in safe_kwargs.items())
        message = f"{message} [{extra_info}]"

    logger.log(level, message, extra=safe_kwargs, exc_info=exc_info)

def debug(logger: logging.Logger, message: str, **kwargs) -> None:
    log_structured(logger, logging.DEBUG, message, **kwargs)

def info(logger: logging.Logger, message: str, **kwargs) -> None:
    log_structured(logger, logging.INFO, message, **kwargs)

def warning(logger: logging.Logger, message: str, **kwargs) -> None:
    log_structured(logger, logging.WARNING, message, **kwargs)

def exception(logger: logging.Logger, message: str, exc_info: Optional[Exception] = None, **kwargs) -> None:
    """Log an exception with its traceback and structured data"""
    log_structured(logger, logging.ERROR, message, exc_info=exc_info, **kwargs)
