"""Custom endpoint static-member maintenance.

The update is a read-modify-write of the whole StaticMembers list. RDS has no
conditional write for ModifyDBClusterEndpoint, so two invocations adding
different instances at the same time can overwrite each other. Only adding is
supported; existing members are never removed.
"""

from __future__ import annotations

from typing import Any, List, Optional

from prewarm_shared.clients.rds import RdsControlPlane
from prewarm_shared.utils.logger import get_logger

logger = get_logger(__name__)


class EndpointMembershipUpdater:
    def __init__(self, control_plane: RdsControlPlane, log: Any = None) -> None:
        self._control_plane = control_plane
        self._log = log or logger

    def add_member(
        self, endpoint_identifier: str, instance_identifier: str, log: Any = None
    ) -> Optional[List[str]]:
        """Add ``instance_identifier`` to the endpoint's static members.

        Returns the resulting member list, or ``None`` if the endpoint does not
        exist. No write is issued when the instance is already a member.
        """
        log = log or self._log
        endpoint = self._control_plane.describe_endpoint(endpoint_identifier, log=log)
        if endpoint is None:
            log.info(
                "Custom endpoint not found; membership unchanged",
                extra={"endpoint_id": endpoint_identifier, "instance_id": instance_identifier},
            )
            return None

        updated = endpoint.with_member(instance_identifier)
        members = list(updated.static_members)
        if updated.static_members == endpoint.static_members:
            log.info(
                "Instance already a static member",
                extra={"endpoint_id": endpoint_identifier, "instance_id": instance_identifier, "static_members": members},
            )
            return members

        log.info(
            f"Updating Custom Endpoints: {members}",
            extra={"endpoint_id": endpoint_identifier, "static_members": members},
        )
        reported = self._control_plane.modify_endpoint(endpoint_identifier, members)
        if reported and instance_identifier not in reported:
            log.warning(
                "Static members reported after update do not include the instance",
                extra={"endpoint_id": endpoint_identifier, "instance_id": instance_identifier, "static_members": reported},
            )
        return members
