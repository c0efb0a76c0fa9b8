"""
Faculty Reporting Portal - Centralized Logging Configuration

Development: short console lines, detailed lines in LOG_FILE.
Production: JSON lines to stdout and LOG_FILE.

Every line carries the request id and the authenticated user id of the
request that produced it (see RequestLoggingMiddleware and
get_current_user).
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from faculty_portal.core.config import settings


request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

# LogRecord attributes that are not user-supplied `extra` fields
_STANDARD_RECORD_FIELDS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'taskName'}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024

DEV_CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"
DEV_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(user_id)s] | "
    "%(name)s.%(funcName)s:%(lineno)d | %(message)s"
)

NOISY_LOGGERS = ("httpx", "uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_user_id() -> str:
    return user_id_var.get()


def set_user_id(user_id: Any) -> None:
    user_id_var.set('' if user_id is None else str(user_id))


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if get_request_id():
            entry["request_id"] = get_request_id()
        if get_user_id():
            entry["user_id"] = get_user_id()

        exc_type, exc_value, exc_tb = record.exc_info or (None, None, None)
        if exc_type is not None:
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_FIELDS and not key.startswith('_')
        )
        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Text formatter; fills %(request_id)s and %(user_id)s"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.user_id = get_user_id() or '-'
        return super().format(record)


class PortalLogger(logging.Logger):

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self.log(
            level,
            f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": duration_ms,
                **kwargs
            }
        )

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """Login/registration outcome; failures are warnings"""
        parts = [f"Auth {event} {'succeeded' if success else 'failed'}"]
        if user_email:
            parts.append(user_email)
        if reason:
            parts.append(reason)
        self.log(
            logging.INFO if success else logging.WARNING,
            " - ".join(parts),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "user_email": user_email,
                "failure_reason": reason,
                **kwargs
            }
        )

    def log_domain_event(self, entity: str, event: str, entity_id: Any = None,
                         **kwargs) -> None:
        """State change of a portal record, e.g. ("Report", "signed", 12)"""
        suffix = f" #{entity_id}" if entity_id is not None else ""
        self.info(
            f"{entity}{suffix} {event}",
            extra={
                "event_type": "domain",
                "entity": entity,
                "domain_event": event,
                "entity_id": entity_id,
                **kwargs
            }
        )


def _file_handler(formatter: logging.Formatter, backup_count: int) -> RotatingFileHandler:
    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=backup_count)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> PortalLogger:
    logging.setLoggerClass(PortalLogger)

    logger = logging.getLogger("faculty_portal")
    # getLogger may have created it before setLoggerClass ran
    logger.__class__ = PortalLogger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.handlers.clear()

    json_logs = settings.ENVIRONMENT == "production"
    if json_logs:
        console_formatter = file_formatter = JSONFormatter()
        backup_count = 10
    else:
        console_formatter = ContextualFormatter(DEV_CONSOLE_FORMAT)
        file_formatter = ContextualFormatter(DEV_FILE_FORMAT)
        backup_count = 5

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(console_formatter)
    logger.addHandler(console)

    if settings.LOG_FILE:
        logger.addHandler(_file_handler(file_formatter, backup_count))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(
        "Logging initialized",
        extra={"environment": settings.ENVIRONMENT, "json_logging": json_logs}
    )
    return logger


logger: PortalLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'get_user_id',
    'set_user_id',
    'generate_request_id',
    'PortalLogger',
    'JSONFormatter',
    'ContextualFormatter',
]
