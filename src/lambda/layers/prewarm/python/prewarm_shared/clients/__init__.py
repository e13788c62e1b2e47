"""Client wrappers for RDS, Secrets Manager and PostgreSQL."""

from __future__ import annotations

from .postgres import PgPrewarmExecutor
from .rds import RdsControlPlane
from .secrets import SecretsManagerCredentialProvider

__all__ = [
    "PgPrewarmExecutor",
    "RdsControlPlane",
    "SecretsManagerCredentialProvider",
]
