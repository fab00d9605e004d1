"""
cep_weather.observability.logging

Structured logging configuration for both services.

Responsibilities:
- Configure `structlog` for JSON logs tagged with the service name.
- Keep the weather provider's API key out of every log line.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

# WeatherAPI takes its credential as a query parameter (`?key=...`).
_API_KEY_IN_URL = re.compile(r"([?&]key=)[^&\s\"']+")
REDACTED = "***"


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # httpx logs every request URL at INFO, key included.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_api_key,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    # Gateway and downstream logs land in the same sink; "service" tells them apart.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_api_key(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Transport errors stringify the failing URL, so scrub every string value.
    for k, v in event_dict.items():
        if isinstance(v, str) and "key=" in v:
            event_dict[k] = _API_KEY_IN_URL.sub(rf"\g<1>{REDACTED}", v)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`;
# the per-request trace id is bound explicitly by the services.
