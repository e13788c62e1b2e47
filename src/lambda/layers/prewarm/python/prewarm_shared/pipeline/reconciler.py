"""Replica prewarm pipeline.

Received -> Filtered -> TopologyResolved -> EndpointResolved -> Authenticated
-> Prewarmed -> MembershipUpdated -> Done

Each stage either yields the data the next stage needs or ends the run with a
SKIPPED outcome. Call failures are not caught here.
"""

from __future__ import annotations

from typing import Any, Optional

from prewarm_shared.clients.postgres import PgPrewarmExecutor
from prewarm_shared.clients.rds import RdsControlPlane
from prewarm_shared.clients.secrets import SecretsManagerCredentialProvider
from prewarm_shared.models.resources import PipelineOutcome
from prewarm_shared.models.settings import PrewarmerSettings
from prewarm_shared.pipeline.event_filter import describe_event, is_new_instance_event, parse_envelope
from prewarm_shared.pipeline.membership import EndpointMembershipUpdater
from prewarm_shared.pipeline.topology import find_reader_member, resolve_instance_endpoint
from prewarm_shared.utils.logger import get_logger

logger = get_logger(__name__)


class ReplicaPrewarmPipeline:
    def __init__(
        self,
        settings: PrewarmerSettings,
        control_plane: RdsControlPlane,
        credentials: SecretsManagerCredentialProvider,
        executor: PgPrewarmExecutor,
        membership: Optional[EndpointMembershipUpdater] = None,
    ) -> None:
        self._settings = settings
        self._control_plane = control_plane
        self._credentials = credentials
        self._executor = executor
        self._membership = membership or EndpointMembershipUpdater(control_plane)

    def _skip(self, log: Any, reason: str, instance_id: Optional[str] = None, **extra: Any) -> PipelineOutcome:
        log.info(f"Skipping: {reason}", extra={"reason": reason, "instance_id": instance_id, **extra})
        return PipelineOutcome.skipped(reason, instance_id=instance_id)

    def run(self, event: Any, log: Any = None) -> PipelineOutcome:
        log = log or logger
        settings = self._settings

        envelope = parse_envelope(event)
        if envelope is None or not is_new_instance_event(envelope):
            log.info("Ignoring event that is not a new DB instance event", extra=describe_event(event))
            return PipelineOutcome.skipped("Not a new DB instance event")
        source_id = envelope.detail.source_identifier

        if not settings.relations:
            return self._skip(log, "No relations configured to prewarm", source_id)

        cluster = self._control_plane.describe_cluster(settings.cluster_identifier, log=log)
        if cluster is None:
            return self._skip(log, "Cluster not found", source_id, cluster_id=settings.cluster_identifier)
        log.info(
            f"Found Cluster: {cluster.cluster_identifier}",
            extra={"cluster_id": cluster.cluster_identifier, "instance_id": source_id},
        )

        member = find_reader_member(cluster, source_id)
        if member is None:
            return self._skip(log, "Instance is not a reader of the cluster", source_id, cluster_id=cluster.cluster_identifier)

        instance = resolve_instance_endpoint(self._control_plane.describe_instance(member.instance_identifier, log=log))
        if instance is None:
            return self._skip(log, "Instance endpoint not available yet", member.instance_identifier)

        credential = self._credentials.get_credential(settings.secret_arn)

        prewarmed = self._executor.prewarm(instance, credential, settings.database, settings.relations, log=log)

        static_members = self._membership.add_member(settings.endpoint_identifier, instance.instance_identifier, log=log)
        if static_members is None:
            return PipelineOutcome(
                status="SKIPPED",
                reason="Custom endpoint not found",
                instance_id=instance.instance_identifier,
                prewarmed=prewarmed,
            )

        log.info(
            "Replica prewarmed and registered",
            extra={"instance_id": instance.instance_identifier, "endpoint_id": settings.endpoint_identifier},
        )
        return PipelineOutcome(
            status="SUCCESS",
            instance_id=instance.instance_identifier,
            prewarmed=prewarmed,
            static_members=static_members,
        )
