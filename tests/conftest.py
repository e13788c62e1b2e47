import json
import logging
import os
import runpy
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import pytest


# Ensure the 'prewarm_shared' layer is importable at collection time (module import stage)
_repo_root = Path(__file__).resolve().parents[1]
_repo_root_str = str(_repo_root)
if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)
_layer_path = _repo_root / "src" / "lambda" / "layers" / "prewarm" / "python"
_layer_str = str(_layer_path)
if _layer_str not in sys.path:
    sys.path.insert(0, _layer_str)

HANDLER_PATH = str(_repo_root / "src" / "lambda" / "functions" / "replica_prewarmer" / "handler.py")


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure default AWS region is set for moto/boto3 clients and clear cross-test env leaks."""
    monkeypatch.setenv("AWS_REGION", os.environ.get("AWS_REGION", "us-east-1"))
    monkeypatch.setenv("AWS_DEFAULT_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))
    # Provide dummy credentials so botocore signing doesn't fail under moto
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")

    for name in ("PREWARM_MODE", "DB_CONNECT_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def prewarmer_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Dict[str, str]]:
    """Apply the prewarmer Lambda environment variables.

    Usage: prewarmer_env() for the db1/ro-endpoint defaults or
    prewarmer_env(items="orders", prewarm_mode="read").
    """

    def _apply(
        *,
        cluster: str = "db1",
        items: str = "orders,customers",
        endpoint: str = "ro-endpoint",
        secret_arn: str = "arn:aws:secretsmanager:us-east-1:123456789012:secret:db1-credentials",
        database: str = "appdb",
        environment: str = "dev",
        prewarm_mode: Optional[str] = None,
    ) -> Dict[str, str]:
        values = {
            "AURORA_PG_CLUSTER_NAME": cluster,
            "ITEMS_TO_PREWARM": items,
            "DB_CLUSTER_ENDPOINT_IDENTIFIER": endpoint,
            "DB_SECRET_ARN": secret_arn,
            "DB_NAME": database,
            "ENVIRONMENT": environment,
        }
        if prewarm_mode:
            values["PREWARM_MODE"] = prewarm_mode
        for key, value in values.items():
            monkeypatch.setenv(key, value)
        return values

    return _apply


@pytest.fixture
def db_secret_string() -> str:
    return json.dumps({"username": "prewarmer", "password": "s3cr3t", "engine": "postgres"})


@pytest.fixture
def json_log_capture() -> Iterator[Callable[..., Tuple[Any, List[Dict[str, Any]]]]]:
    """Return a JSON logger adapter plus the parsed lines it emits.

    Usage: log, lines = json_log_capture(correlation_id="evt-42").
    """
    from prewarm_shared.utils.logger import _JsonFormatter, get_logger

    attached: List[Tuple[logging.Logger, logging.Handler]] = []

    class _ListHandler(logging.Handler):
        def __init__(self, lines: List[Dict[str, Any]]) -> None:
            super().__init__()
            self.lines = lines
            self.setFormatter(_JsonFormatter())

        def emit(self, record: logging.LogRecord) -> None:
            self.lines.append(json.loads(self.format(record)))

    def _apply(*, correlation_id: Optional[str] = None, name: str = "tests.prewarm") -> Tuple[Any, List[Dict[str, Any]]]:
        log = get_logger(name, correlation_id=correlation_id)
        lines: List[Dict[str, Any]] = []
        handler = _ListHandler(lines)
        log.logger.addHandler(handler)
        attached.append((log.logger, handler))
        return log, lines

    yield _apply

    for base, handler in attached:
        base.removeHandler(handler)


@pytest.fixture
def load_handler(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Dict[str, Any]]:
    """Run the handler module with boto3 and psycopg connect replaced by stubs."""

    def _apply(*, rds: Any, secretsmanager: Any, connector: Any) -> Dict[str, Any]:
        import boto3
        import psycopg

        from tests.fixtures.clients import BotoStub

        boto_stub = BotoStub(rds=rds, secretsmanager=secretsmanager)
        monkeypatch.setattr(boto3, "client", lambda service, **kwargs: boto_stub.client(service))
        monkeypatch.setattr(psycopg, "connect", connector)
        return runpy.run_path(HANDLER_PATH)

    return _apply


def pytest_configure(config):
    """Configure pytest with essential markers."""
    config.addinivalue_line("markers", "unit: unit test")
    config.addinivalue_line("markers", "integration: integration test")


def pytest_collection_modifyitems(config, items):
    """Add markers based on file location."""
    rootdir = Path(config.rootdir)

    for item in items:
        try:
            rel_path = Path(item.fspath).relative_to(rootdir)
        except ValueError:
            continue
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        if "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)
