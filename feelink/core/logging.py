"""
Unified logging
Structured JSON log output for every component
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from .exceptions import FeelinkException


_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
}


class StructuredFormatter(logging.Formatter):
    """Structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        if hasattr(record, 'filename'):
            log_entry["file"] = record.filename
        if hasattr(record, 'lineno'):
            log_entry["line"] = record.lineno
        if hasattr(record, 'funcName'):
            log_entry["function"] = record.funcName

        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None
            }

            if isinstance(record.exc_info[1], FeelinkException):
                log_entry["exception"]["error_code"] = record.exc_info[1].error_code
                log_entry["exception"]["details"] = record.exc_info[1].details

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class FeelinkLogger:
    """Unified logging system"""

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def configure(cls, log_level: str = "INFO"):
        """Configure the feelink root logger once per process"""
        if cls._configured:
            return

        root_logger = logging.getLogger("feelink")
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(console_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger under the feelink namespace"""
        if not cls._configured:
            cls.configure()

        if name not in cls._loggers:
            logger_name = f"feelink.{name}" if not name.startswith("feelink") else name
            cls._loggers[name] = logging.getLogger(logger_name)

        return cls._loggers[name]


def get_logger(name: str) -> logging.Logger:
    """Get a logger"""
    return FeelinkLogger.get_logger(name)


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None):
    """Error log"""
    extra_info = {"event_type": "error"}
    if context:
        extra_info.update(context)

    logger.error(f"Error occurred: {str(error)}", exc_info=True, extra=extra_info)


def log_degradation(logger: logging.Logger, component: str, error: Exception, **kwargs):
    """Warning log for a collaborator failure that was recovered with a safe default"""
    logger.warning(f"{component} degraded: {error}", extra={
        "event_type": "degradation",
        "component": component,
        "error": str(error),
        **kwargs
    })


def log_business_event(logger: logging.Logger, event: str, user_hash: Optional[str] = None,
                      **kwargs):
    """Business event log"""
    extra_info = {
        "event_type": "business_event",
        "business_event": event
    }
    if user_hash:
        extra_info["user_hash"] = user_hash
    extra_info.update(kwargs)

    logger.info(f"Business event: {event}", extra=extra_info)
