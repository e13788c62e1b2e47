"""Thin wrapper over the boto3 RDS client for the control-plane calls we need.

Describe calls translate "not found" faults into ``None`` so callers can skip;
every other ``ClientError`` propagates.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from botocore.exceptions import ClientError

from prewarm_shared.models.resources import ClusterDescriptor, EndpointDescriptor, InstanceDescriptor
from prewarm_shared.utils.logger import get_logger

logger = get_logger(__name__)

_CLUSTER_NOT_FOUND = {"DBClusterNotFoundFault"}
_INSTANCE_NOT_FOUND = {"DBInstanceNotFound", "DBInstanceNotFoundFault"}
_ENDPOINT_NOT_FOUND = {"DBClusterEndpointNotFoundFault"}


def _error_code(exc: ClientError) -> Optional[str]:
    return exc.response.get("Error", {}).get("Code")


class RdsControlPlane:
    def __init__(self, rds_client: Any, log: Any = None) -> None:
        self._rds = rds_client
        self._log = log or logger

    def describe_cluster(self, cluster_identifier: str, log: Any = None) -> Optional[ClusterDescriptor]:
        try:
            resp = self._rds.describe_db_clusters(DBClusterIdentifier=cluster_identifier)
        except ClientError as exc:
            if _error_code(exc) in _CLUSTER_NOT_FOUND:
                (log or self._log).info("Cluster not found", extra={"cluster_id": cluster_identifier})
                return None
            raise
        clusters: List[Dict[str, Any]] = resp.get("DBClusters") or []
        if not clusters:
            return None
        return ClusterDescriptor.from_api(clusters[0])

    def describe_instance(self, instance_identifier: str, log: Any = None) -> Optional[InstanceDescriptor]:
        try:
            resp = self._rds.describe_db_instances(DBInstanceIdentifier=instance_identifier)
        except ClientError as exc:
            if _error_code(exc) in _INSTANCE_NOT_FOUND:
                (log or self._log).info("Instance not found", extra={"instance_id": instance_identifier})
                return None
            raise
        instances: List[Dict[str, Any]] = resp.get("DBInstances") or []
        if not instances:
            return None
        return InstanceDescriptor.from_api(instances[0])

    def describe_endpoint(self, endpoint_identifier: str, log: Any = None) -> Optional[EndpointDescriptor]:
        try:
            resp = self._rds.describe_db_cluster_endpoints(DBClusterEndpointIdentifier=endpoint_identifier)
        except ClientError as exc:
            if _error_code(exc) in _ENDPOINT_NOT_FOUND:
                (log or self._log).info("Cluster endpoint not found", extra={"endpoint_id": endpoint_identifier})
                return None
            raise
        endpoints: List[Dict[str, Any]] = resp.get("DBClusterEndpoints") or []
        if not endpoints:
            return None
        return EndpointDescriptor.from_api(endpoints[0])

    def modify_endpoint(self, endpoint_identifier: str, static_members: Sequence[str]) -> List[str]:
        """Replace the endpoint's static members; returns the members RDS reports back."""
        resp = self._rds.modify_db_cluster_endpoint(
            DBClusterEndpointIdentifier=endpoint_identifier,
            StaticMembers=list(static_members),
        )
        return list(resp.get("StaticMembers") or [])
