"""Lightweight JSON logger utility for the prewarmer Lambda.

Emits one JSON object per line with environment and correlation_id fields
when available, plus a small whitelist of pipeline context fields passed via
``extra``.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

# Per-call extras that are copied into the JSON payload
_CONTEXT_FIELDS = (
    "cluster_id",
    "instance_id",
    "endpoint_id",
    "relation",
    "blocks",
    "static_members",
    "reason",
    "event_id",
    "source",
    "detail_type",
    "event_code",
)


def _resolve_level(raw: Optional[str]) -> int:
    # Unknown names fall back to INFO
    level = logging.getLevelName((raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": record.created,
        }
        env = getattr(record, "environment", None) or os.environ.get("ENVIRONMENT")
        if env:
            payload["environment"] = env
        corr = getattr(record, "correlation_id", None)
        if corr:
            payload["correlation_id"] = corr
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, correlation_id: Optional[str] = None) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter with optional correlation_id."""
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
        # Lambda installs its own root handler; avoid duplicate lines
        base.propagate = False
    base.setLevel(_resolve_level(os.environ.get("LOG_LEVEL")))
    extras: Dict[str, Any] = {"environment": os.environ.get("ENVIRONMENT")}
    if correlation_id:
        extras["correlation_id"] = correlation_id
    return _Adapter(base, extras)


def extract_correlation_id(event: Optional[Dict[str, Any]], context: Any = None) -> Optional[str]:
    """Pick a correlation id from an EventBridge envelope or the Lambda context.

    Order: envelope ``id``, explicit ``correlation_id`` field, then the Lambda
    ``aws_request_id``.
    """
    if isinstance(event, dict):
        for key in ("id", "correlation_id"):
            val = event.get(key)
            if isinstance(val, str) and val:
                return val
    request_id = getattr(context, "aws_request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return None
