"""Cluster topology and instance endpoint resolution."""

from __future__ import annotations

from typing import Optional

from prewarm_shared.models.resources import ClusterDescriptor, ClusterMember, InstanceDescriptor


def find_reader_member(cluster: ClusterDescriptor, source_identifier: str) -> Optional[ClusterMember]:
    """First member matching the event source that is not the cluster writer."""
    for member in cluster.members:
        if member.instance_identifier == source_identifier and not member.is_writer:
            return member
    return None


def resolve_instance_endpoint(instance: Optional[InstanceDescriptor]) -> Optional[InstanceDescriptor]:
    # No address yet means the instance is still provisioning
    if instance is None or not instance.is_reachable:
        return None
    return instance
