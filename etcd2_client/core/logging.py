"""Optional JSON logging setup for applications using the client."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class ServiceContextFilter(logging.Filter):
    """Stamp records with the service name, version and environment."""

    def __init__(self, service: Dict[str, str], environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = dict(self.service)
        if not hasattr(record, "environment"):
            record.environment = self.environment
        return True


class JSONFormatter(logging.Formatter):
    """One JSON document per record, with ``extra`` fields kept as-is."""

    def format(self, record: logging.LogRecord) -> str:
        doc: Dict[str, Any] = {
            "@timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            doc["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stack_trace": self.formatException(record.exc_info),
            }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in doc:
                doc[key] = value
        return json.dumps(doc, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    http_level: Optional[str] = None,
    application_name: Optional[str] = None,
    stream=None,
) -> None:
    """Send JSON logs from the client, httpx and the root logger to ``stream``.

    ``http_level`` controls the ``httpx``/``httpcore`` loggers separately
    (defaults to WARNING so per-request chatter stays out of the logs).
    Service name, version and environment default to the
    ``APPLICATION_NAME``, ``APPLICATION_VERSION`` and ``ENVIRONMENT``
    environment variables.
    """
    from .. import __version__

    service = {
        "name": application_name or os.getenv("APPLICATION_NAME", "etcd2-client"),
        "version": os.getenv("APPLICATION_VERSION", __version__),
    }
    context_filter = ServiceContextFilter(
        service, os.getenv("ENVIRONMENT", "development")
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(context_filter)

    def level_of(name: Optional[str], default: int) -> int:
        return getattr(logging, str(name).upper(), default) if name else default

    root_logger = logging.getLogger()
    root_logger.setLevel(level_of(level, logging.INFO))
    root_logger.handlers = [handler]

    for logger_name, logger_level in (
        ("etcd2_client", level_of(level, logging.INFO)),
        ("httpx", level_of(http_level, logging.WARNING)),
        ("httpcore", level_of(http_level, logging.WARNING)),
    ):
        logger = logging.getLogger(logger_name)
        logger.setLevel(logger_level)
        logger.handlers = [handler]
        logger.propagate = False

    logging.getLogger("etcd2_client").info(
        "logging_configured",
        extra={"event": {"category": "application", "action": "logging_started"}},
    )


__all__ = ["JSONFormatter", "ServiceContextFilter", "setup_logging"]
