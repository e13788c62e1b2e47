"""Snapshots of RDS resources and pipeline results.

These are built fresh per invocation from API responses and are never cached.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ClusterMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_identifier: str
    is_writer: bool = False


class ClusterDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    cluster_identifier: str
    members: Tuple[ClusterMember, ...] = ()

    @classmethod
    def from_api(cls, cluster: Dict[str, Any]) -> "ClusterDescriptor":
        members = tuple(
            ClusterMember(
                instance_identifier=m["DBInstanceIdentifier"],
                is_writer=bool(m.get("IsClusterWriter", False)),
            )
            for m in cluster.get("DBClusterMembers") or []
            if m.get("DBInstanceIdentifier")
        )
        return cls(cluster_identifier=cluster["DBClusterIdentifier"], members=members)


class InstanceDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_identifier: str
    network_address: Optional[str] = None
    port: Optional[int] = None

    @property
    def is_reachable(self) -> bool:
        return bool(self.network_address) and self.port is not None

    @classmethod
    def from_api(cls, instance: Dict[str, Any]) -> "InstanceDescriptor":
        # Endpoint is missing while the instance is still being created
        endpoint = instance.get("Endpoint") or {}
        port = endpoint.get("Port")
        return cls(
            instance_identifier=instance["DBInstanceIdentifier"],
            network_address=endpoint.get("Address") or None,
            port=int(port) if port is not None else None,
        )


class EndpointDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint_identifier: str
    static_members: Tuple[str, ...] = ()

    @classmethod
    def from_api(cls, endpoint: Dict[str, Any]) -> "EndpointDescriptor":
        return cls(
            endpoint_identifier=endpoint["DBClusterEndpointIdentifier"],
            static_members=tuple(endpoint.get("StaticMembers") or ()),
        )

    def with_member(self, instance_identifier: str) -> "EndpointDescriptor":
        """Return a copy whose static members include ``instance_identifier``.

        Existing order is kept and duplicates already present are collapsed so
        that a redelivered event never grows the list.
        """
        merged: List[str] = []
        for member in (*self.static_members, instance_identifier):
            if member not in merged:
                merged.append(member)
        return self.model_copy(update={"static_members": tuple(merged)})


class DbCredential(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    username: str = Field(min_length=1)
    password: SecretStr


class PrewarmResult(BaseModel):
    relation: str
    blocks: Optional[int] = None


class PipelineOutcome(BaseModel):
    status: str
    reason: Optional[str] = None
    instance_id: Optional[str] = None
    prewarmed: List[PrewarmResult] = Field(default_factory=list)
    static_members: Optional[List[str]] = None

    @classmethod
    def skipped(cls, reason: str, instance_id: Optional[str] = None) -> "PipelineOutcome":
        return cls(status="SKIPPED", reason=reason, instance_id=instance_id)
