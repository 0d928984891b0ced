"""
Logging for the authorship governance engine.

Every governance decision is logged with the ids an operator needs to find
it again: image, project, export, the event type, the authorship status and
the reason codes. Both formatters lift those fields out of ``extra=`` and
render them first; anything else passed via ``extra=`` goes under
``context`` in JSON output and is dropped from the development output.

Usage:
    from authorship_governance.logging_config import get_logger
    logger = get_logger(__name__)
    logger.warning("Export blocked", extra={"export_id": export_id, "reason_codes": codes})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

# Set by RequestIdMiddleware for the duration of one HTTP request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Rendered in this order, ahead of any other extra field
GOVERNANCE_FIELDS = (
    "image_id",
    "project_id",
    "export_id",
    "event_type",
    "authorship_status",
    "reason_codes",
)

# Attributes every LogRecord carries; never treated as extra fields
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "request_id"}


def get_request_id() -> Optional[str]:
    return request_id_var.get()


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"  # type: ignore[attr-defined]
        return True


def _plain(value: Any) -> Any:
    """Reduce enums (and lists of them) to their values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def governance_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Governance ids present on ``record``, in GOVERNANCE_FIELDS order."""
    fields: Dict[str, Any] = {}
    for name in GOVERNANCE_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            fields[name] = _plain(value)
    return fields


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Governance ids are top-level keys so the log aggregator can index them;
    other extras are nested under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        req_id = getattr(record, "request_id", None)
        if req_id and req_id != "-":
            log_obj["request_id"] = req_id

        log_obj.update(governance_fields(record))

        context: Dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key in GOVERNANCE_FIELDS or value is None:
                continue
            value = _plain(value)
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            context[key] = value
        if context:
            log_obj["context"] = context

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


class GovernanceTextFormatter(logging.Formatter):
    """Human-readable line with governance ids appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = "-"  # type: ignore[attr-defined]
        line = super().format(record)
        fields = governance_fields(record)
        if not fields:
            return line
        pairs = " ".join(
            f"{k}={','.join(map(str, v)) if isinstance(v, list) else v}"
            for k, v in fields.items()
        )
        return f"{line} | {pairs}"


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install one stderr handler on the root logger.

    JSON in production, GovernanceTextFormatter elsewhere. ``debug`` forces
    DEBUG regardless of ``log_level``. Safe to call more than once.
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter() if environment == "production" else GovernanceTextFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
