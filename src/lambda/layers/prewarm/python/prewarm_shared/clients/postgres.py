"""Data-plane cache warming through ``pg_prewarm`` over psycopg 3."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

import psycopg

from prewarm_shared.models.resources import DbCredential, InstanceDescriptor, PrewarmResult
from prewarm_shared.utils.logger import get_logger

logger = get_logger(__name__)

# Relation name and mode are always bound parameters, never formatted into the text
PREWARM_QUERY = "SELECT pg_prewarm(%s::regclass, %s)"
APPLICATION_NAME = "aurora-replica-prewarmer"


class PgPrewarmExecutor:
    def __init__(
        self,
        *,
        mode: str = "buffer",
        connect_timeout: int = 10,
        connect: Optional[Callable[..., Any]] = None,
        log: Any = None,
    ) -> None:
        self._mode = mode
        self._connect_timeout = connect_timeout
        self._connect = connect or psycopg.connect
        self._log = log or logger

    def prewarm(
        self,
        instance: InstanceDescriptor,
        credential: DbCredential,
        database: str,
        relations: Sequence[str],
        log: Any = None,
    ) -> List[PrewarmResult]:
        """Warm each relation in order over a single connection.

        The connection is closed on every exit path. The first failing relation
        aborts the loop and the error propagates.
        """
        log = log or self._log
        results: List[PrewarmResult] = []
        with self._connect(
            host=instance.network_address,
            port=instance.port,
            user=credential.username,
            password=credential.password.get_secret_value(),
            dbname=database,
            connect_timeout=self._connect_timeout,
            application_name=APPLICATION_NAME,
            autocommit=True,
        ) as conn:
            with conn.cursor() as cur:
                for relation in relations:
                    cur.execute(PREWARM_QUERY, (relation, self._mode))
                    row = cur.fetchone()
                    blocks = int(row[0]) if row and row[0] is not None else None
                    results.append(PrewarmResult(relation=relation, blocks=blocks))
                    log.info(
                        f"Prewarmed: {relation}",
                        extra={"instance_id": instance.instance_identifier, "relation": relation, "blocks": blocks},
                    )
        return results
