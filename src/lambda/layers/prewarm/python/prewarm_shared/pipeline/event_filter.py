"""In-handler copy of the EventBridge rule pattern."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from prewarm_shared.models.events import (
    NEW_INSTANCE_EVENT_ID,
    RDS_EVENT_SOURCE,
    RDS_INSTANCE_DETAIL_TYPE,
    EventEnvelope,
)


def parse_envelope(event: Any) -> Optional[EventEnvelope]:
    """Parse a raw Lambda event; anything that is not an RDS envelope gives ``None``."""
    if not isinstance(event, dict):
        return None
    try:
        return EventEnvelope.model_validate(event)
    except ValidationError:
        return None


def is_new_instance_event(envelope: Optional[EventEnvelope]) -> bool:
    if envelope is None:
        return False
    return (
        envelope.source == RDS_EVENT_SOURCE
        and envelope.detail_type == RDS_INSTANCE_DETAIL_TYPE
        and envelope.detail.event_id == NEW_INSTANCE_EVENT_ID
        and bool(envelope.detail.source_identifier)
    )


def describe_event(event: Any) -> Dict[str, Any]:
    """Small summary of a raw event for skip logs."""
    if not isinstance(event, dict):
        return {"type": type(event).__name__}
    detail = event.get("detail") if isinstance(event.get("detail"), dict) else {}
    return {
        "source": event.get("source"),
        "detail_type": event.get("detail-type"),
        "event_code": detail.get("EventID"),
    }
