"""Environment settings for the prewarmer Lambda."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from prewarm_shared.errors import ConfigurationError

PREWARM_MODES = ("buffer", "read", "prefetch")

_REQUIRED = (
    "AURORA_PG_CLUSTER_NAME",
    "DB_CLUSTER_ENDPOINT_IDENTIFIER",
    "DB_SECRET_ARN",
    "DB_NAME",
)


def parse_relations(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class PrewarmerSettings:
    cluster_identifier: str
    relations: Tuple[str, ...]
    endpoint_identifier: str
    secret_arn: str
    database: str
    prewarm_mode: str = "buffer"
    connect_timeout: int = 10
    environment: Optional[str] = None

    @staticmethod
    def load(environ: Optional[Mapping[str, str]] = None) -> "PrewarmerSettings":
        env = os.environ if environ is None else environ

        missing = [name for name in _REQUIRED if not (env.get(name) or "").strip()]
        if missing:
            raise ConfigurationError(missing)

        mode = (env.get("PREWARM_MODE") or "buffer").strip().lower()
        if mode not in PREWARM_MODES:
            raise ConfigurationError(
                ["PREWARM_MODE"], f"PREWARM_MODE must be one of {', '.join(PREWARM_MODES)}, got {mode!r}"
            )

        timeout_raw = (env.get("DB_CONNECT_TIMEOUT_SECONDS") or "10").strip()
        try:
            timeout = int(timeout_raw)
        except ValueError:
            raise ConfigurationError(
                ["DB_CONNECT_TIMEOUT_SECONDS"], f"DB_CONNECT_TIMEOUT_SECONDS must be an integer, got {timeout_raw!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError(["DB_CONNECT_TIMEOUT_SECONDS"], "DB_CONNECT_TIMEOUT_SECONDS must be positive")

        return PrewarmerSettings(
            cluster_identifier=env["AURORA_PG_CLUSTER_NAME"].strip(),
            relations=parse_relations(env.get("ITEMS_TO_PREWARM")),
            endpoint_identifier=env["DB_CLUSTER_ENDPOINT_IDENTIFIER"].strip(),
            secret_arn=env["DB_SECRET_ARN"].strip(),
            database=env["DB_NAME"].strip(),
            prewarm_mode=mode,
            connect_timeout=timeout,
            environment=env.get("ENVIRONMENT"),
        )
