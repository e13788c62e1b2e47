"""Database credential lookup backed by AWS Secrets Manager."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from prewarm_shared.errors import CredentialDecodeError
from prewarm_shared.models.resources import DbCredential


class SecretsManagerCredentialProvider:
    def __init__(self, secrets_client: Any) -> None:
        self._secrets = secrets_client

    def get_credential(self, secret_id: str) -> DbCredential:
        """Fetch ``secret_id`` and decode its JSON ``SecretString``.

        ``ClientError`` from Secrets Manager propagates as-is. A payload that is
        not a JSON object with ``username`` and ``password`` raises
        ``CredentialDecodeError``; the payload itself is never included in the
        message.
        """
        resp = self._secrets.get_secret_value(SecretId=secret_id)
        secret_string = resp.get("SecretString")
        if not secret_string:
            raise CredentialDecodeError(f"Secret {secret_id} has no SecretString")

        try:
            payload = json.loads(secret_string)
        except json.JSONDecodeError as exc:
            raise CredentialDecodeError(f"Secret {secret_id} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise CredentialDecodeError(f"Secret {secret_id} must be a JSON object")

        try:
            return DbCredential.model_validate(payload)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise CredentialDecodeError(f"Secret {secret_id} is missing or has invalid fields: {fields}") from None
