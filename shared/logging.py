"""
Structured logging for the Todo Auth service.

Every event is one JSON line on stdout carrying the service name, level,
logger name and an ISO-8601 UTC timestamp. Inside a request the request id
and, once a bearer token has been accepted, the user id are added as well.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Callable, Dict, Optional

import structlog

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Request-scoped correlation values
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


def resolve_log_level(log_level: str) -> int:
    """Map a configured level name such as ``"info"`` to its logging constant.

    Raises:
        ValueError: The name is not one of ``LOG_LEVELS``
    """
    try:
        return LOG_LEVELS[log_level.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}"
        ) from None


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structlog and the stdlib root logger for a service."""
    level = resolve_log_level(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            service_context(service_name),
            add_request_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    # basicConfig does nothing once the root logger has handlers
    logging.getLogger().setLevel(level)


def service_context(service_name: str) -> Processor:
    """Build a processor that stamps every event with the service name."""

    def add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service


def add_request_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Attach the current request id and authenticated user id, when set."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_id = user_id_var.get()
    if user_id:
        event_dict["user_id"] = user_id

    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind the caller's request id, or a fresh one, to the current context."""
    if not request_id:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def set_user_context(user_id: int) -> None:
    """Bind the authenticated user id to the current context."""
    user_id_var.set(str(user_id))


def clear_context() -> None:
    request_id_var.set(None)
    user_id_var.set(None)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger named ``auth.<component>``."""
    return structlog.get_logger(name)
