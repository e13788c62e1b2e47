"""EventBridge → Aurora replica prewarmer.

Triggered by ``RDS-EVENT-0005`` (new DB instance created). For a new reader of
the configured cluster it loads the configured relations into the replica's
buffer cache with ``pg_prewarm`` and then adds the replica to the custom
endpoint's static members.

Failures are logged and re-raised so the invocation fails and the platform's
redelivery and alarms take over.
"""

from __future__ import annotations

import json
from typing import Any, Dict

import boto3

from prewarm_shared.clients import PgPrewarmExecutor, RdsControlPlane, SecretsManagerCredentialProvider
from prewarm_shared.models.settings import PrewarmerSettings
from prewarm_shared.pipeline import ReplicaPrewarmPipeline
from prewarm_shared.utils.logger import extract_correlation_id, get_logger

logger = get_logger(__name__)

_SETTINGS = PrewarmerSettings.load()
# Reused across warm invocations
_rds = boto3.client("rds")
_secrets = boto3.client("secretsmanager")


def build_pipeline(settings: PrewarmerSettings, rds_client: Any, secrets_client: Any) -> ReplicaPrewarmPipeline:
    control_plane = RdsControlPlane(rds_client)
    return ReplicaPrewarmPipeline(
        settings=settings,
        control_plane=control_plane,
        credentials=SecretsManagerCredentialProvider(secrets_client),
        executor=PgPrewarmExecutor(mode=settings.prewarm_mode, connect_timeout=settings.connect_timeout),
    )


_PIPELINE = build_pipeline(_SETTINGS, _rds, _secrets)


def main(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    corr_id = extract_correlation_id(event, context)
    log = get_logger(__name__, correlation_id=corr_id) if corr_id else logger
    log.debug(f"Received event: {json.dumps(event, default=str)}")

    try:
        outcome = _PIPELINE.run(event, log=log)
    except Exception:
        log.exception(
            "Replica prewarm failed",
            extra={"cluster_id": _SETTINGS.cluster_identifier, "endpoint_id": _SETTINGS.endpoint_identifier},
        )
        raise

    return outcome.model_dump()
