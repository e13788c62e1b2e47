"""Pipeline stages for replica prewarming."""

from __future__ import annotations

from .event_filter import is_new_instance_event, parse_envelope
from .membership import EndpointMembershipUpdater
from .reconciler import ReplicaPrewarmPipeline
from .topology import find_reader_member, resolve_instance_endpoint

__all__ = [
    "EndpointMembershipUpdater",
    "ReplicaPrewarmPipeline",
    "find_reader_member",
    "is_new_instance_event",
    "parse_envelope",
    "resolve_instance_endpoint",
]
