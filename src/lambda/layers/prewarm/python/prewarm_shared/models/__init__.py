"""Models subpackage exposed via the prewarm layer."""

from .events import EventEnvelope, LifecycleEvent, NEW_INSTANCE_EVENT_ID
from .resources import (
    ClusterDescriptor,
    ClusterMember,
    DbCredential,
    EndpointDescriptor,
    InstanceDescriptor,
    PipelineOutcome,
    PrewarmResult,
)
from .settings import PrewarmerSettings

__all__ = [
    "EventEnvelope",
    "LifecycleEvent",
    "NEW_INSTANCE_EVENT_ID",
    "ClusterDescriptor",
    "ClusterMember",
    "DbCredential",
    "EndpointDescriptor",
    "InstanceDescriptor",
    "PipelineOutcome",
    "PrewarmResult",
    "PrewarmerSettings",
]
