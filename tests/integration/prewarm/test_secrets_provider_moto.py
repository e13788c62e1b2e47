"""Credential provider against a moto-backed Secrets Manager."""

import json
import os

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from prewarm_shared.clients.secrets import SecretsManagerCredentialProvider
from prewarm_shared.errors import CredentialDecodeError


def _client():
    return boto3.client("secretsmanager", region_name=os.environ.get("AWS_REGION", "us-east-1"))


@mock_aws
def test_reads_credentials_from_secrets_manager() -> None:
    """
    Given: RDS 관리형 시크릿 형식의 JSON 시크릿
    When: ARN으로 자격 증명 조회
    Then: username/password 디코딩
    """
    client = _client()
    arn = client.create_secret(
        Name="db1-credentials",
        SecretString=json.dumps(
            {"username": "prewarmer", "password": "s3cr3t", "engine": "postgres", "port": 5432}
        ),
    )["ARN"]

    credential = SecretsManagerCredentialProvider(client).get_credential(arn)

    assert credential.username == "prewarmer"
    assert credential.password.get_secret_value() == "s3cr3t"


@mock_aws
def test_plain_text_secret_is_rejected() -> None:
    client = _client()
    client.create_secret(Name="db1-credentials", SecretString="prewarmer:s3cr3t")

    with pytest.raises(CredentialDecodeError):
        SecretsManagerCredentialProvider(client).get_credential("db1-credentials")


@mock_aws
def test_missing_secret_propagates_client_error() -> None:
    """
    Given: 존재하지 않는 시크릿
    When: 자격 증명 조회
    Then: ResourceNotFoundException이 그대로 전파
    """
    with pytest.raises(ClientError) as exc_info:
        SecretsManagerCredentialProvider(_client()).get_credential("does-not-exist")

    assert exc_info.value.response["Error"]["Code"] == "ResourceNotFoundException"
